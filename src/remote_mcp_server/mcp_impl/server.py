"""Bind a tool registry to a low-level MCP server."""

from typing import Any, Dict, List

from mcp import types
from mcp.server.lowlevel import Server

from ..tool_core import ServerConfig, get_logger
from .registry import MCPToolRegistry

logger = get_logger(__name__)


def build_server(registry: MCPToolRegistry, config: ServerConfig) -> Server:
    """Create an MCP server whose tool handlers delegate to the registry.

    Unknown tools and invalid arguments raise out of `registry.invoke`; the MCP
    framework reports them to the client as error results.

    Args:
        registry: The populated tool registry.
        config: Settings providing the server identity.

    Returns:
        The configured low-level MCP server.
    """
    server: Server = Server(config.server_name, version=config.server_version)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return registry.tool_object

    # The registry validates with the tool's pydantic model; skip the framework's jsonschema pass.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        logger.debug(f"Tool call '{name}' with arguments: {arguments}")
        result = await registry.invoke(name, arguments)
        return registry.to_content(result)

    logger.info(f"MCP server '{config.server_name}' {config.server_version} ready with tools: {registry.names}")
    return server
