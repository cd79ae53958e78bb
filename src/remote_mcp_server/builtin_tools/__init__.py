"""The tools this server exposes and their registration."""

from typing import Optional

from ..tool_core import ServerConfig, ToolRegistry
from .arithmetic import AddArgs, CalculateArgs, add, calculate, format_number
from .github_prs import ClientFactory, GitHubPRSearch, GitHubQueryParams, PullRequestRecord

GITHUB_PRS_DESCRIPTION = (
    "Find pull requests a GitHub user opened between two ISO-8601 datetimes. "
    "Returns a summary line followed by a JSON list of {title, url, createdAt, state}."
)


def register_builtin_tools(
    registry: ToolRegistry,
    config: ServerConfig,
    client_factory: Optional[ClientFactory] = None,
) -> ToolRegistry:
    """Register `add`, `calculate` and `github-prs` into a registry.

    Args:
        registry: The registry to populate.
        config: Settings providing the GitHub token, API URL and timeout.
        client_factory: Optional HTTP client factory for the GitHub search.

    Returns:
        The same registry, for chaining.
    """
    registry.register("add", AddArgs, add)
    registry.register("calculate", CalculateArgs, calculate)

    github_search = GitHubPRSearch(
        config.github_pat,
        api_url=config.github_api_url,
        timeout=config.github_timeout,
        client_factory=client_factory,
    )
    registry.register("github-prs", GitHubQueryParams, github_search.run, description=GITHUB_PRS_DESCRIPTION)
    return registry


__all__ = [
    "register_builtin_tools",
    "AddArgs",
    "CalculateArgs",
    "add",
    "calculate",
    "format_number",
    "GitHubPRSearch",
    "GitHubQueryParams",
    "PullRequestRecord",
]
