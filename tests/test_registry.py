import asyncio
import json
from typing import Any, List, Optional
from unittest.mock import MagicMock

import pytest
from pydantic import BaseModel, Field, ValidationError

from remote_mcp_server.tool_core import (
    ToolDefinition,
    ToolNotFoundError,
    ToolRegistrationError,
    ToolResult,
    ToolValidationError,
)


class EchoArgs(BaseModel):
    text: str = Field(description="Text to echo")


class Node(BaseModel):
    value: int
    children: List["Node"] = []


class TreeArgs(BaseModel):
    root: Node


def echo(args: EchoArgs) -> ToolResult:
    """Echo the text back."""
    return ToolResult.from_text(args.text)


@pytest.mark.asyncio
async def test_invoke_validates_and_runs_handler(registry: Any) -> None:
    registry.register("echo", EchoArgs, echo)

    result = await registry.invoke("echo", {"text": "hello"})

    assert result.texts == ["hello"]
    assert result.content[0].type == "text"


def test_register_uses_docstring_as_description(registry: Any) -> None:
    registry.register("echo", EchoArgs, echo)

    tool_def = registry.get("echo")
    assert tool_def.description == "Echo the text back."
    assert tool_def.parameters["type"] == "object"
    assert tool_def.parameters["required"] == ["text"]
    assert "title" not in tool_def.parameters


def test_register_explicit_description_wins(registry: Any) -> None:
    registry.register("echo", EchoArgs, echo, description="Repeat input.")
    assert registry.get("echo").description == "Repeat input."


def test_register_missing_docstring(registry: Any) -> None:
    def no_doc(args: EchoArgs) -> ToolResult:
        return ToolResult.from_text(args.text)

    with pytest.raises(ToolValidationError, match="missing docstring"):
        registry.register("no_doc", EchoArgs, no_doc)


def test_register_by_name_requires_parts(registry: Any) -> None:
    with pytest.raises(ToolRegistrationError):
        registry.register("echo", EchoArgs)


def test_register_tool_definition_directly(registry: Any) -> None:
    tool = ToolDefinition(name="echo", description="Echo.", func=echo, args_model=EchoArgs)
    registry.register(tool)
    assert registry.names == ["echo"]


def test_tool_definition_requires_callable_handler() -> None:
    with pytest.raises(ValidationError):
        ToolDefinition(name="echo", description="Echo.", func="echo", args_model=EchoArgs)


def test_register_rejects_recursive_models(registry: Any) -> None:
    def walk(args: TreeArgs) -> ToolResult:
        """Walk a tree."""
        return ToolResult.from_text(str(args.root.value))

    with pytest.raises(ToolValidationError, match="Recursive structure detected"):
        registry.register("walk", TreeArgs, walk)


@pytest.mark.asyncio
async def test_duplicate_registration_last_wins(registry: Any) -> None:
    def shout(args: EchoArgs) -> ToolResult:
        """Echo the text in upper case."""
        return ToolResult.from_text(args.text.upper())

    registry.register("echo", EchoArgs, echo)
    registry.register("echo", EchoArgs, shout)

    assert registry.names == ["echo"]
    result = await registry.invoke("echo", {"text": "hi"})
    assert result.texts == ["HI"]


@pytest.mark.asyncio
async def test_unknown_tool_raises_not_found(registry: Any) -> None:
    with pytest.raises(ToolNotFoundError, match="'missing' not found"):
        await registry.invoke("missing", {})


@pytest.mark.asyncio
async def test_invalid_arguments_do_not_run_handler(registry: Any) -> None:
    handler = MagicMock(return_value=ToolResult.from_text("never"))
    registry.register("echo", EchoArgs, handler, description="Echo.")

    with pytest.raises(ToolValidationError, match="text"):
        await registry.invoke("echo", {"text": 42})

    with pytest.raises(ToolValidationError):
        await registry.invoke("echo", {})

    handler.assert_not_called()


@pytest.mark.asyncio
async def test_non_object_arguments_are_invalid(registry: Any) -> None:
    registry.register("echo", EchoArgs, echo)

    with pytest.raises(ToolValidationError, match="JSON object"):
        await registry.invoke("echo", "[1, 2]")

    with pytest.raises(ToolValidationError, match="must be an object"):
        await registry.invoke("echo", 7)


@pytest.mark.asyncio
async def test_json_string_arguments_are_accepted(registry: Any) -> None:
    registry.register("echo", EchoArgs, echo)

    result = await registry.invoke("echo", json.dumps({"text": "from json"}))

    assert result.texts == ["from json"]


@pytest.mark.asyncio
async def test_handler_exception_becomes_error_text(registry: Any) -> None:
    def broken(args: EchoArgs) -> ToolResult:
        """Always fails."""
        raise RuntimeError("boom")

    registry.register("broken", EchoArgs, broken)
    registry.register("echo", EchoArgs, echo)

    result = await registry.invoke("broken", {"text": "x"})
    assert result.texts == ["Error executing tool 'broken': boom"]

    # The registry keeps serving after a faulty handler
    follow_up = await registry.invoke("echo", {"text": "still here"})
    assert follow_up.texts == ["still here"]


@pytest.mark.asyncio
async def test_async_handler_is_awaited(registry: Any) -> None:
    async def delayed_echo(args: EchoArgs) -> ToolResult:
        """Echo after yielding to the loop."""
        await asyncio.sleep(0)
        return ToolResult.from_text(args.text)

    registry.register("delayed_echo", EchoArgs, delayed_echo)

    result = await registry.invoke("delayed_echo", {"text": "later"})
    assert result.texts == ["later"]


@pytest.mark.asyncio
async def test_handler_timeout_becomes_error_text(registry: Any) -> None:
    async def slow(args: EchoArgs) -> ToolResult:
        """Never finishes in time."""
        await asyncio.sleep(10)
        return ToolResult.from_text(args.text)

    registry.tool_timeout = 0.01
    registry.register("slow", EchoArgs, slow)

    result = await registry.invoke("slow", {"text": "x"})

    assert len(result.content) == 1
    assert result.texts[0].startswith("Error executing tool 'slow': Tool execution timed out")


@pytest.mark.asyncio
async def test_handler_returning_plain_dict_is_coerced(registry: Any) -> None:
    def raw(args: EchoArgs) -> Optional[dict]:
        """Return an untyped envelope."""
        return {"content": [{"type": "text", "text": args.text}]}

    registry.register("raw", EchoArgs, raw)

    result = await registry.invoke("raw", {"text": "dict"})
    assert isinstance(result, ToolResult)
    assert result.texts == ["dict"]
