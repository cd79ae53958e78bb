"""Process configuration read from the environment (and an optional .env file)."""

import os
from typing import Callable, Mapping, Optional, TypeVar

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ConfigError
from .logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_GITHUB_API_URL = "https://api.github.com"


class ServerConfig(BaseModel):
    """Runtime settings of the server.

    Attributes:
        github_pat: GitHub personal access token. Empty means "not configured",
            which the GitHub tool reports as an error result instead of failing at startup.
        github_api_url: Base URL of the GitHub REST API.
        github_timeout: Timeout in seconds for the outbound GitHub request.
        tool_timeout: Timeout in seconds for a single tool invocation.
        server_name: Server identity reported to MCP clients.
        server_version: Server version reported to MCP clients.
        host: Interface the HTTP server binds to.
        port: Port the HTTP server listens on.
        log_level: Logging level name.
    """

    model_config = ConfigDict(frozen=True)

    github_pat: str = Field(default="", repr=False)
    github_api_url: str = DEFAULT_GITHUB_API_URL
    github_timeout: float = 10.0
    tool_timeout: float = 30.0
    server_name: str = "Crazy"
    server_version: str = "1.0.0"
    host: str = "127.0.0.1"
    port: int = 8787
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, *, dotenv: bool = True) -> "ServerConfig":
        """Build the configuration from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.
            dotenv: Whether to load a ``.env`` file into the process environment first.
                Ignored when an explicit mapping is given.

        Returns:
            The resulting configuration.

        Raises:
            ConfigError: If a numeric setting cannot be parsed.
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        defaults = cls()
        config = cls(
            github_pat=environ.get("GITHUB_PAT", "").strip(),
            github_api_url=environ.get("GITHUB_API_URL", defaults.github_api_url).rstrip("/"),
            github_timeout=_parse(environ, "GITHUB_TIMEOUT", float, defaults.github_timeout),
            tool_timeout=_parse(environ, "TOOL_TIMEOUT", float, defaults.tool_timeout),
            server_name=environ.get("MCP_SERVER_NAME", defaults.server_name),
            server_version=environ.get("MCP_SERVER_VERSION", defaults.server_version),
            host=environ.get("HOST", defaults.host),
            port=_parse(environ, "PORT", int, defaults.port),
            log_level=environ.get("LOG_LEVEL", defaults.log_level).upper(),
        )
        if not config.github_pat:
            logger.warning("GITHUB_PAT is not set. The 'github-prs' tool will report an error on every call.")
        return config


def _parse(environ: Mapping[str, str], key: str, convert: Callable[[str], T], default: T) -> T:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return convert(raw.strip())
    except ValueError as e:
        msg = f"Invalid value for {key}: {raw!r}"
        logger.error(msg)
        raise ConfigError(msg) from e
