"""GitHub pull-request search tool backed by the Search Issues API."""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any, Callable

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..tool_core import ToolResult, get_logger
from ..tool_core.config import DEFAULT_GITHUB_API_URL

logger = get_logger(__name__)

GITHUB_PAT_MISSING_MESSAGE = "Error: GitHub PAT not found in environment variables"
GITHUB_ACCEPT_HEADER = "application/vnd.github.v3+json"
GITHUB_USER_AGENT = "remote-mcp-server-authless"
SEARCH_ISSUES_PATH = "/search/issues"

# UTC timestamps with optional fractional seconds, e.g. 2024-01-01T00:00:00Z
ISO_DATETIME_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(?:\.[0-9]+)?Z$")

ClientFactory = Callable[[], httpx.AsyncClient]


class GitHubQueryParams(BaseModel):
    """Input of the `github-prs` tool."""

    model_config = ConfigDict(populate_by_name=True)

    start_date: str = Field(
        alias="startDate",
        description="Start of the creation window, ISO-8601 UTC datetime",
        json_schema_extra={"format": "date-time"},
    )
    end_date: str = Field(
        alias="endDate",
        description="End of the creation window, ISO-8601 UTC datetime",
        json_schema_extra={"format": "date-time"},
    )
    github_username: str = Field(alias="githubUsername", min_length=1, description="GitHub login of the PR author")

    @field_validator("start_date", "end_date")
    @classmethod
    def validate_datetime(cls, value: str) -> str:
        """Accept only ISO-8601 UTC datetimes that name a real instant."""
        if not ISO_DATETIME_PATTERN.fullmatch(value):
            raise ValueError("must be an ISO-8601 datetime such as 2024-01-01T00:00:00Z")
        # The pattern checks the shape, strptime rejects impossible dates like month 13
        datetime.strptime(value[:19], "%Y-%m-%dT%H:%M:%S")
        return value


class PullRequestRecord(BaseModel):
    """One pull request as reported back to the caller."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    url: str
    created_at: str = Field(alias="createdAt")
    state: str

    @classmethod
    def from_search_item(cls, item: dict[str, Any]) -> PullRequestRecord:
        """Reshape one item of the Search Issues response."""
        return cls(
            title=item["title"],
            url=item["html_url"],
            created_at=item["created_at"],
            state=item["state"],
        )


def build_search_query(params: GitHubQueryParams) -> str:
    """Build the search qualifier string for PRs authored in the date window."""
    return f"author:{params.github_username} type:pr created:{params.start_date}..{params.end_date}"


def parse_search_response(payload: Any) -> list[PullRequestRecord]:
    """Convert a Search Issues payload into pull request records.

    Raises:
        ValueError: If the payload is not an object carrying an ``items`` list.
        KeyError: If an item lacks one of the required fields.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("items"), list):
        raise ValueError("Expected a JSON object with an 'items' list.")
    return [PullRequestRecord.from_search_item(item) for item in payload["items"]]


def render_records(records: list[PullRequestRecord]) -> str:
    """Serialize records as a JSON array indented by two spaces."""
    return json.dumps([record.model_dump(by_alias=True) for record in records], indent=2, ensure_ascii=False)


class GitHubPRSearch:
    """
    Runs the `github-prs` tool: one authenticated search request per call.

    Every failure (missing token, non-2xx status, network error, malformed body)
    is returned as an error text result. No retries are made.
    """

    def __init__(
        self,
        token: str,
        *,
        api_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = 10.0,
        client_factory: ClientFactory | None = None,
    ) -> None:
        """Initialize the search adapter.

        Args:
            token: GitHub personal access token. Empty disables the tool.
            api_url: Base URL of the GitHub REST API.
            timeout: Timeout in seconds for the request.
            client_factory: Builds the HTTP client used for one call. Defaults to a
                plain ``httpx.AsyncClient`` with the configured timeout.
        """
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._client_factory = client_factory or self._default_client

    def _default_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": GITHUB_ACCEPT_HEADER,
            "User-Agent": GITHUB_USER_AGENT,
        }

    async def run(self, params: GitHubQueryParams) -> ToolResult:
        """Find pull requests a GitHub user opened between two ISO-8601 datetimes."""
        if not self._token:
            logger.warning("GitHub PAT is not configured; skipping the search request.")
            return ToolResult.from_text(GITHUB_PAT_MISSING_MESSAGE)

        query = build_search_query(params)
        logger.info(f"Searching GitHub PRs with query '{query}'.")
        try:
            async with self._client_factory() as client:
                response = await client.get(
                    f"{self._api_url}{SEARCH_ISSUES_PATH}",
                    params={"q": query},
                    headers=self._headers(),
                )
        except httpx.HTTPError as error:
            logger.warning(f"GitHub search request failed: {error!r}")
            return ToolResult.from_text(f"Error fetching PRs: network error ({type(error).__name__}: {error})")

        if not response.is_success:
            logger.warning(f"GitHub search returned status {response.status_code}.")
            return ToolResult.from_text(f"Error fetching PRs: {response.text}")

        try:
            records = parse_search_response(response.json())
        except (ValueError, KeyError, TypeError, ValidationError) as error:
            logger.warning(f"Unexpected GitHub search payload: {error}")
            return ToolResult.from_text("Error fetching PRs: unexpected response from GitHub")

        logger.info(f"Found {len(records)} PRs for '{params.github_username}'.")
        return ToolResult.from_text(
            f"Found {len(records)} PRs for {params.github_username} between {params.start_date} and {params.end_date}:",
            render_records(records),
        )
