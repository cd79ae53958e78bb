from typing import Literal, Optional

import pytest
from pydantic import BaseModel, Field

from remote_mcp_server.tool_core import SchemaValidator, ToolValidationError


class Address(BaseModel):
    street: str = Field(description="Street name")
    city: str = Field(description="City name")


class ShipArgs(BaseModel):
    title: str = Field(description="Shipment label")
    address: Address
    speed: Literal["slow", "fast"] = "slow"
    note: Optional[str] = Field(default=None, description="Free text")


def test_validate_returns_value_on_success() -> None:
    outcome = SchemaValidator.validate(ShipArgs, {"title": "Box", "address": {"street": "Main", "city": "Oslo"}})

    assert outcome.ok
    assert outcome.error is None
    assert outcome.value is not None
    assert outcome.value.address.city == "Oslo"
    assert outcome.value.speed == "slow"


def test_validate_returns_error_instead_of_raising() -> None:
    outcome = SchemaValidator.validate(ShipArgs, {"title": "Box", "address": {"street": "Main"}, "speed": "warp"})

    assert not outcome.ok
    assert outcome.value is None
    assert "address.city" in outcome.error
    assert "speed" in outcome.error


def test_normalize_arguments_accepts_empty_values() -> None:
    assert SchemaValidator.normalize_arguments(None) == {}
    assert SchemaValidator.normalize_arguments("") == {}
    assert SchemaValidator.normalize_arguments("null") == {}


def test_normalize_arguments_rejects_bad_json() -> None:
    with pytest.raises(ValueError, match="not valid JSON"):
        SchemaValidator.normalize_arguments("{oops")


def test_build_parameters_inlines_refs_and_keeps_property_names() -> None:
    schema = SchemaValidator.build_parameters(ShipArgs)

    assert "$defs" not in schema
    assert "$ref" not in str(schema)
    # A property literally called "title" must survive metadata stripping
    assert "title" in schema["properties"]
    assert schema["properties"]["title"]["type"] == "string"
    assert "title" not in schema["properties"]["title"]
    assert schema["properties"]["address"]["properties"]["city"]["type"] == "string"
    assert schema["properties"]["speed"]["enum"] == ["slow", "fast"]
    assert schema["properties"]["note"]["type"] == "string"
    assert schema["properties"]["note"]["description"] == "Free text"


def test_assert_no_recursive_refs_no_recursion() -> None:
    schema = {
        "type": "object",
        "properties": {
            "prop1": {"type": "string"},
            "prop2": {"type": "object", "properties": {"subprop": {"type": "integer"}}},
        },
    }
    # Should not raise
    SchemaValidator.assert_no_recursive_refs(schema)


def test_assert_no_recursive_refs_with_recursion() -> None:
    schema = {
        "$defs": {"Node": {"type": "object", "properties": {"child": {"$ref": "#/$defs/Node"}}}},
        "properties": {"root": {"$ref": "#/$defs/Node"}},
    }
    with pytest.raises(ToolValidationError, match="Recursive structure detected"):
        SchemaValidator.assert_no_recursive_refs(schema)


def test_sanitize_schema_removes_metadata() -> None:
    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "$id": "http://example.com/schema",
        "title": "MySchema",
        "type": "object",
        "properties": {"field": {"type": "string", "title": "FieldTitle"}},
        "definitions": {"SomeDef": {}},
    }
    sanitized = SchemaValidator.sanitize_schema(schema)

    assert "$schema" not in sanitized
    assert "$id" not in sanitized
    assert "title" not in sanitized
    assert "definitions" not in sanitized
    assert "title" not in sanitized["properties"]["field"]


def test_sanitize_schema_simplifies_optional() -> None:
    schema = {
        "type": "object",
        "properties": {
            "optional_field": {
                "anyOf": [{"type": "integer", "description": "An integer"}, {"type": "null"}],
                "description": "Parent description",
            }
        },
    }
    sanitized = SchemaValidator.sanitize_schema(schema)
    field = sanitized["properties"]["optional_field"]

    assert "anyOf" not in field
    assert field["type"] == "integer"
    assert field["description"] == "Parent description"
