"""Tool registry."""

from .base import ToolRegistry, DEFAULT_TOOL_TIMEOUT

__all__ = ["ToolRegistry", "DEFAULT_TOOL_TIMEOUT"]
