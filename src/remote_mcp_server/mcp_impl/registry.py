"""Adapt generic tool definitions and results into MCP protocol types."""

from typing import List, Optional

from mcp import types

from ..builtin_tools import register_builtin_tools
from ..builtin_tools.github_prs import ClientFactory
from ..tool_core import ServerConfig, ToolRegistry, ToolResult


class MCPToolRegistry(ToolRegistry):
    """
    A specialized ToolRegistry for the Model Context Protocol.

    It renders the registered tools as `mcp.types.Tool` entries for `tools/list`
    and converts `ToolResult` envelopes into MCP content blocks for `tools/call`.
    """

    @property
    def tool_object(self) -> List[types.Tool]:
        """
        Generates the MCP tool catalog based on the registered tools.

        Returns:
            One `types.Tool` per registered tool, in registration order.
        """
        return [
            types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.parameters or {"type": "object", "properties": {}},
            )
            for tool in self.tools.values()
        ]

    @staticmethod
    def to_content(result: ToolResult) -> List[types.TextContent]:
        """Converts a ToolResult into MCP text content blocks, preserving order."""
        return [types.TextContent(type="text", text=item.text) for item in result.content]


def build_registry(config: ServerConfig, client_factory: Optional[ClientFactory] = None) -> MCPToolRegistry:
    """Create the process registry with all built-in tools registered.

    Args:
        config: Server settings.
        client_factory: Optional HTTP client factory for the GitHub search.

    Returns:
        A populated MCPToolRegistry.
    """
    registry = MCPToolRegistry(tool_timeout=config.tool_timeout)
    register_builtin_tools(registry, config, client_factory=client_factory)
    return registry
