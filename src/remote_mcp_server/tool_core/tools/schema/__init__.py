"""Tool schema generation and argument validation."""

from .schema_validator import SchemaValidator, ValidationOutcome

__all__ = ["SchemaValidator", "ValidationOutcome"]
