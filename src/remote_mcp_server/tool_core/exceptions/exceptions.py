"""
Custom exception classes for the tool server.

This module defines a hierarchy of exceptions used to handle errors during
tool registration, argument validation and execution, plus configuration
loading.
"""


class ToolError(Exception):
    """Base exception for all tool-related errors."""

    pass


class ToolRegistrationError(ToolError):
    """Raised when there is an error registering a tool."""

    pass


class ToolNotFoundError(ToolError):
    """Raised when a requested tool is not found in the registry."""

    pass


class ToolExecutionError(ToolError):
    """Raised when a tool fails during execution."""

    pass


class ToolValidationError(ToolError):
    """Raised when tool arguments or a tool definition are invalid."""

    pass


class ConfigError(ValueError):
    """Raised when a configuration value cannot be parsed."""

    pass
