"""HTTP surface of the server: the SSE and streamable-HTTP endpoints."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional

from mcp.server.lowlevel import Server
from mcp.server.sse import SseServerTransport
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from ..builtin_tools.github_prs import ClientFactory
from ..tool_core import ServerConfig, get_logger
from .registry import build_registry
from .server import build_server

logger = get_logger(__name__)

SSE_PATH = "/sse"
SSE_MESSAGE_PATH = "/sse/message"
MCP_PATH = "/mcp"

ASGIHandler = Callable[[Scope, Receive, Send], Awaitable[None]]


class _ASGIEndpoint:
    """Hands a route straight to an ASGI callable, bypassing request/response wrapping."""

    def __init__(self, handler: ASGIHandler) -> None:
        self._handler = handler

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self._handler(scope, receive, send)


class TransportRouter:
    """
    Connects one MCP server to both HTTP transports.

    `/sse` opens a server-sent event stream and `/sse/message` receives the client's
    messages for that stream. `/mcp` answers each POST with a single JSON response
    and keeps no session between requests.
    """

    def __init__(self, server: Server) -> None:
        """Initialize both transports for the given server.

        Args:
            server: The MCP server that handles the protocol messages.
        """
        self.server = server
        self.sse = SseServerTransport(SSE_MESSAGE_PATH)
        self.session_manager = StreamableHTTPSessionManager(app=server, json_response=True, stateless=True)

    async def handle_sse(self, scope: Scope, receive: Receive, send: Send) -> None:
        logger.info("SSE client connected.")
        async with self.sse.connect_sse(scope, receive, send) as (read_stream, write_stream):
            await self.server.run(read_stream, write_stream, self.server.create_initialization_options())
        logger.info("SSE client disconnected.")

    async def handle_sse_message(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.sse.handle_post_message(scope, receive, send)

    async def handle_mcp(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.session_manager.handle_request(scope, receive, send)

    @property
    def routes(self) -> list[Route]:
        return [
            Route(SSE_PATH, endpoint=_ASGIEndpoint(self.handle_sse), methods=["GET"]),
            Route(SSE_MESSAGE_PATH, endpoint=_ASGIEndpoint(self.handle_sse_message), methods=["POST"]),
            Route(MCP_PATH, endpoint=_ASGIEndpoint(self.handle_mcp)),
        ]


async def not_found(request: Request, exc: HTTPException) -> Response:
    return PlainTextResponse("Not found", status_code=404)


def build_app(server: Server) -> Starlette:
    """Create the ASGI application exposing `server` on both transports.

    Args:
        server: The MCP server.

    Returns:
        A Starlette application. Paths other than the transport endpoints get
        404 with the body "Not found".
    """
    router = TransportRouter(server)

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with router.session_manager.run():
            logger.info("Streamable HTTP session manager started.")
            yield
        logger.info("Streamable HTTP session manager stopped.")

    app = Starlette(routes=router.routes, exception_handlers={404: not_found}, lifespan=lifespan)
    # /mcp/ and friends are unknown paths, not redirects
    app.router.redirect_slashes = False
    return app


def create_app(config: Optional[ServerConfig] = None, client_factory: Optional[ClientFactory] = None) -> Starlette:
    """Build registry, server and ASGI application in one step.

    Args:
        config: Server settings. Read from the environment when omitted.
        client_factory: Optional HTTP client factory for the GitHub search.

    Returns:
        The ready-to-serve ASGI application.
    """
    config = config or ServerConfig.from_env()
    registry = build_registry(config, client_factory=client_factory)
    return build_app(build_server(registry, config))
