"""Export the exception hierarchy used across registration, validation and execution paths."""

from .exceptions import (
    ToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolExecutionError,
    ToolValidationError,
    ConfigError,
)

__all__ = [
    "ToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
    "ConfigError",
]
