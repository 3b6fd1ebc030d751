"""Shared type definitions for the service models.

Integers cross the wire as decimal strings so that uint256 values survive
JSON clients that only have doubles.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from curve_engine.safe_int import UINT256_MAX


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint256 as decimal string

    Raises:
        ValueError: If value is not a valid non-negative integer within uint256 range
    """
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool):
        raise ValueError("Uint256 must be string or int, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        if not value.isdigit():
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'")
        int_value = int(value)
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")

    return str(int_value)


# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]

# Whole bytes as 0x-prefixed hex
Bytes = Annotated[str, Field(pattern=r"^0x(?:[a-fA-F0-9]{2})*$")]


def hex_to_bytes(value: str) -> bytes:
    """Convert a validated 0x-prefixed hex string to bytes."""
    return bytes.fromhex(value[2:])
