from typing import Any, Callable, List

import httpx
import pytest

from remote_mcp_server.tool_core import ServerConfig, ToolRegistry

GitHubHandler = Callable[[httpx.Request], httpx.Response]


# Concrete implementation for testing base class functionality
# Named to avoid PytestCollectionWarning
class ConcreteTestRegistry(ToolRegistry):
    @property
    def tool_object(self) -> Any:
        return list(self.tools)


@pytest.fixture
def registry() -> ConcreteTestRegistry:
    return ConcreteTestRegistry(tool_timeout=5.0)


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig(github_pat="test-token", github_api_url="https://api.github.com", github_timeout=5.0)


@pytest.fixture
def recorded_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def github_client_factory(recorded_requests: List[httpx.Request]) -> Callable[[GitHubHandler], Callable[[], httpx.AsyncClient]]:
    """
    Builds client factories backed by httpx.MockTransport.
    Every request that reaches the transport is appended to `recorded_requests`.
    """

    def build(handler: GitHubHandler) -> Callable[[], httpx.AsyncClient]:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        def factory() -> httpx.AsyncClient:
            return httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))

        return factory

    return build
