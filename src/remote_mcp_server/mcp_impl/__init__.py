from .registry import MCPToolRegistry, build_registry
from .server import build_server
from .transport import MCP_PATH, SSE_MESSAGE_PATH, SSE_PATH, TransportRouter, build_app, create_app

__all__ = [
    "MCPToolRegistry",
    "build_registry",
    "build_server",
    "TransportRouter",
    "build_app",
    "create_app",
    "SSE_PATH",
    "SSE_MESSAGE_PATH",
    "MCP_PATH",
]
