"""Public exports for the transport-agnostic tool core."""

from .tools import ToolRegistry, ToolDefinition, ToolResult, TextContent, SchemaValidator, ValidationOutcome
from .exceptions import (
    ToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolExecutionError,
    ToolValidationError,
    ConfigError,
)
from .config import ServerConfig
from .logger import get_logger, setup_logging

__all__ = [
    "ToolRegistry",
    "ToolDefinition",
    "ToolResult",
    "TextContent",
    "SchemaValidator",
    "ValidationOutcome",
    "ToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
    "ConfigError",
    "ServerConfig",
    "get_logger",
    "setup_logging",
]
