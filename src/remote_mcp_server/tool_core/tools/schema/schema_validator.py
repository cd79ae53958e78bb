"""Validation of tool arguments and derivation of the JSON schemas advertised to clients."""

import json
from dataclasses import dataclass
from typing import Any, Dict, Generic, Mapping, Optional, Set, Type, TypeVar

import jsonref  # type: ignore
from pydantic import BaseModel, ValidationError

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

ArgsT = TypeVar("ArgsT", bound=BaseModel)

_METADATA_KEYS = ("$defs", "$schema", "$id", "title", "definitions")


@dataclass(frozen=True)
class ValidationOutcome(Generic[ArgsT]):
    """Result of validating raw arguments against a tool's input shape.

    Exactly one of ``value`` and ``error`` is set.

    Attributes:
        value: The validated, typed arguments.
        error: A human-readable description of why validation failed.
    """

    value: Optional[ArgsT] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SchemaValidator:
    """
    Helper class for validating tool arguments and sanitizing JSON schemas.
    """

    @staticmethod
    def validate(args_model: Type[ArgsT], raw_args: Any) -> ValidationOutcome[ArgsT]:
        """
        Validates raw (untyped) arguments against a tool's pydantic input model.

        Raw arguments may be None or an empty string (meaning no arguments), a
        mapping, or a JSON string that decodes to an object.

        Args:
            args_model: The pydantic model describing the tool input.
            raw_args: The arguments exactly as received from the transport.

        Returns:
            A ValidationOutcome carrying either the model instance or an error message.
        """
        try:
            arguments = SchemaValidator.normalize_arguments(raw_args)
        except ValueError as e:
            return ValidationOutcome(error=str(e))

        try:
            return ValidationOutcome(value=args_model.model_validate(arguments))
        except ValidationError as e:
            return ValidationOutcome(error=SchemaValidator.format_validation_error(e))

    @staticmethod
    def normalize_arguments(raw_args: Any) -> Dict[str, Any]:
        """Normalize tool arguments into a dictionary.

        Args:
            raw_args: The raw arguments (mapping, JSON string, or None).

        Returns:
            A dictionary of arguments.

        Raises:
            ValueError: If the arguments cannot be interpreted as an object.
        """
        if raw_args is None or raw_args == "":
            return {}

        if isinstance(raw_args, Mapping):
            return dict(raw_args)

        if isinstance(raw_args, str):
            try:
                parsed = json.loads(raw_args)
            except json.JSONDecodeError as e:
                raise ValueError(f"Arguments are not valid JSON: {e}") from e

            if parsed is None:
                return {}
            if not isinstance(parsed, dict):
                raise ValueError("Arguments must decode to a JSON object.")
            return parsed

        raise ValueError(f"Arguments must be an object, got {type(raw_args).__name__}.")

    @staticmethod
    def format_validation_error(error: ValidationError) -> str:
        """Flattens a pydantic ValidationError into a single line.

        Args:
            error: The pydantic error.

        Returns:
            Messages of the form ``field: reason`` joined by ``; ``.
        """
        parts = []
        for item in error.errors():
            location = ".".join(str(part) for part in item["loc"]) or "arguments"
            parts.append(f"{location}: {item['msg']}")
        return "; ".join(parts)

    @staticmethod
    def build_parameters(args_model: Type[BaseModel]) -> Dict[str, Any]:
        """
        Derives the JSON schema advertised for a tool from its input model.

        Args:
            args_model: The pydantic model describing the tool input.

        Returns:
            A self-contained JSON schema without ``$ref`` indirections.

        Raises:
            ToolValidationError: If the model contains recursive structures.
        """
        raw_schema = args_model.model_json_schema()
        # 1. Check for recursion
        SchemaValidator.assert_no_recursive_refs(raw_schema)

        # 2. Resolve refs using jsonref
        # proxies=False ensures we get a plain dict back, not JsonRef objects
        resolved = jsonref.replace_refs(raw_schema, proxies=False)

        # 3. Sanitize schema (remove $defs, title, etc.)
        return SchemaValidator.sanitize_schema(resolved)

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Checks if the schema contains recursive references by traversing the graph.
        Raises ToolValidationError if a cycle is detected.

        Args:
            schema: The JSON schema to check.

        Raises:
            ToolValidationError: If a recursive reference is found.
        """
        defs = schema.get("$defs", {}) or schema.get("definitions", {})

        def check(node: Any, path: Set[str]) -> None:
            if isinstance(node, dict):
                if "$ref" in node:
                    ref = node["$ref"]
                    if ref in path:
                        msg = (
                            f"Recursive structure detected: {ref}. "
                            "Recursive structures are not allowed in tool inputs."
                        )
                        logger.error(msg)
                        raise ToolValidationError(msg)

                    # e.g. #/$defs/MyModel
                    if ref.startswith("#"):
                        parts = ref.split("/")
                        if len(parts) >= 3:
                            def_name = parts[-1]
                            if def_name in defs:
                                check(defs[def_name], path | {ref})
                    return

                for v in node.values():
                    check(v, path)
            elif isinstance(node, list):
                for item in node:
                    check(item, path)

        check(schema, set())

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Cleans up a schema before it is advertised to clients.
        Removes $defs, $schema, $id, title and definitions.
        Simplifies Optional fields (anyOf with null).

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        new_schema = schema.copy()

        for key in _METADATA_KEYS:
            new_schema.pop(key, None)

        if "anyOf" in new_schema:
            non_null = [x for x in new_schema["anyOf"] if x.get("type") != "null"]

            if len(non_null) == 1 and isinstance(non_null[0], dict):
                # The parent description wins over the one of the inner type
                merged = non_null[0].copy()
                if "description" in new_schema:
                    merged["description"] = new_schema["description"]
                if "default" in new_schema:
                    merged["default"] = new_schema["default"]
                return SchemaValidator.sanitize_schema(merged)

        for key, value in new_schema.items():
            if key == "properties" and isinstance(value, dict):
                # Property names are user data, never metadata keys
                new_schema[key] = {name: SchemaValidator.sanitize_schema(prop) for name, prop in value.items()}
            elif isinstance(value, dict):
                new_schema[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                new_schema[key] = [
                    SchemaValidator.sanitize_schema(item) if isinstance(item, dict) else item for item in value
                ]

        return new_schema
