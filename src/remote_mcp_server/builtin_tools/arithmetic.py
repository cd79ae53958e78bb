"""Arithmetic tools: `add` and the four-operation `calculate`."""

import math
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from ..tool_core import ToolResult, get_logger

logger = get_logger(__name__)

DIVIDE_BY_ZERO_MESSAGE = "Error: Cannot divide by zero"

Operation = Literal["add", "subtract", "multiply", "divide"]


# strict=True: JSON numbers only, numeric strings and booleans are rejected
class AddArgs(BaseModel):
    a: float = Field(strict=True, description="First addend")
    b: float = Field(strict=True, description="Second addend")


class CalculateArgs(BaseModel):
    operation: Operation = Field(description="The operation to apply to a and b")
    a: float = Field(strict=True, description="Left operand")
    b: float = Field(strict=True, description="Right operand")


def format_number(value: float) -> str:
    """Render a number the way tool callers expect to read it.

    Uses the shortest digits that round-trip, laid out like JavaScript's
    ``Number.prototype.toString``: plain notation from ``1e-6`` up to below
    ``1e21`` (``5`` rather than ``5.0``, ``0.00001`` rather than ``1e-05``),
    exponent notation without zero padding outside it (``1e-7``, ``1e+21``).
    Infinities render as ``Infinity``/``-Infinity`` and NaN as ``NaN``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    # value == 0.<digits> * 10 ** point
    point = exponent + len(digits)

    if len(digits) <= point <= 21:
        text = digits + "0" * (point - len(digits))
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        mantissa = digits[0] + (f".{digits[1:]}" if len(digits) > 1 else "")
        text = f"{mantissa}e{point - 1:+d}"
    return f"-{text}" if value < 0 else text


def add(args: AddArgs) -> ToolResult:
    """Add two numbers and return the sum."""
    return ToolResult.from_text(format_number(args.a + args.b))


def calculate(args: CalculateArgs) -> ToolResult:
    """Apply add, subtract, multiply or divide to two numbers."""
    a, b = args.a, args.b
    if args.operation == "add":
        result = a + b
    elif args.operation == "subtract":
        result = a - b
    elif args.operation == "multiply":
        result = a * b
    else:
        if b == 0:
            logger.warning(f"Division by zero requested with a={a}.")
            return ToolResult.from_text(DIVIDE_BY_ZERO_MESSAGE)
        result = a / b

    return ToolResult.from_text(format_number(result))
