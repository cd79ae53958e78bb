"""Remote MCP server - arithmetic and GitHub PR search tools over SSE and streamable HTTP."""

from .tool_core import (
    ServerConfig,
    ToolRegistry,
    ToolDefinition,
    ToolResult,
    TextContent,
    ToolNotFoundError,
    ToolValidationError,
)
from .mcp_impl import MCPToolRegistry, build_registry, build_server, build_app, create_app

__version__ = "1.0.0"

__all__ = [
    "ServerConfig",
    "ToolRegistry",
    "ToolDefinition",
    "ToolResult",
    "TextContent",
    "ToolNotFoundError",
    "ToolValidationError",
    "MCPToolRegistry",
    "build_registry",
    "build_server",
    "build_app",
    "create_app",
]
