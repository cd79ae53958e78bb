from .models import TextContent, ToolDefinition, ToolHandler, ToolResult
from .registry import ToolRegistry
from .execution import run_handler
from .schema import SchemaValidator, ValidationOutcome

__all__ = [
    "TextContent",
    "ToolDefinition",
    "ToolHandler",
    "ToolResult",
    "ToolRegistry",
    "run_handler",
    "SchemaValidator",
    "ValidationOutcome",
]
