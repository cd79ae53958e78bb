"""Tool-related data models."""

from .models import TextContent, ToolDefinition, ToolHandler, ToolResult

__all__ = ["TextContent", "ToolDefinition", "ToolHandler", "ToolResult"]
