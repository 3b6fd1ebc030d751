"""Curve parameter codec.

A pool stores its curve parameters as one opaque 32-byte word:

    byte 0      decimals0
    byte 1      decimals1
    bytes 2..31 curve-specific field (big-endian, up to 240 bits)

Hybrid curves store the amplifier in the field. Weighted curves pack two
8-bit weights into its low 16 bits: field = (weight0 << 8) | weight1.

Decoding validates every field before a params object is built, so a
partially valid blob never escapes.
"""

from __future__ import annotations

from dataclasses import dataclass

from curve_engine.constants import (
    CANONICAL_DECIMALS,
    DATA_LENGTH,
    FIELD_BITS,
    HEADER_LENGTH,
    MIN_AMPLIFIER,
    WEIGHT_BITS,
)
from curve_engine.errors import InvalidData

_WEIGHT_MASK = (1 << WEIGHT_BITS) - 1


@dataclass(frozen=True)
class HybridParams:
    """Decoded Hybrid curve parameters.

    Attributes:
        decimals0: Native decimals of token0 (0..18)
        decimals1: Native decimals of token1 (0..18)
        amplifier: Amplification coefficient scaled by AMP_PRECISION (>= 100)
    """

    decimals0: int
    decimals1: int
    amplifier: int

    def decimals_in_out(self, token_in_index: int) -> tuple[int, int]:
        """Return (decimals_in, decimals_out) for a swap direction."""
        if token_in_index == 0:
            return self.decimals0, self.decimals1
        return self.decimals1, self.decimals0


@dataclass(frozen=True)
class WeightedParams:
    """Decoded Weighted curve parameters.

    Attributes:
        decimals0: Native decimals of token0 (0..18)
        decimals1: Native decimals of token1 (0..18)
        weight0: Weight of token0 (1..255)
        weight1: Weight of token1 (1..255)
    """

    decimals0: int
    decimals1: int
    weight0: int
    weight1: int

    def weights_in_out(self, token_in_index: int) -> tuple[int, int]:
        """Return (weight_in, weight_out) for a swap direction."""
        if token_in_index == 0:
            return self.weight0, self.weight1
        return self.weight1, self.weight0


def split_data(data: bytes) -> tuple[int, int, int]:
    """Split a parameter blob into (decimals0, decimals1, field).

    Only the layout is checked here; range checks belong to the curve
    specific decoders.

    Raises:
        InvalidData: If data is not bytes or has the wrong length
    """
    if not isinstance(data, bytes | bytearray):
        raise InvalidData(f"Curve data must be bytes, got {type(data).__name__}")
    if not HEADER_LENGTH <= len(data) <= DATA_LENGTH:
        raise InvalidData(
            f"Curve data must be {HEADER_LENGTH}..{DATA_LENGTH} bytes, got {len(data)}"
        )
    field = int.from_bytes(data[HEADER_LENGTH:], "big")
    return data[0], data[1], field


def join_data(decimals0: int, decimals1: int, field: int) -> bytes:
    """Build the canonical 32-byte blob.

    Raises:
        InvalidData: If a value does not fit its slot
    """
    if not (0 <= decimals0 <= 0xFF and 0 <= decimals1 <= 0xFF):
        raise InvalidData(f"Decimals must fit one byte, got ({decimals0}, {decimals1})")
    if not 0 <= field < (1 << FIELD_BITS):
        raise InvalidData(f"Curve field must fit {FIELD_BITS} bits")
    return bytes([decimals0, decimals1]) + field.to_bytes(DATA_LENGTH - HEADER_LENGTH, "big")


def _check_decimals(decimals0: int, decimals1: int) -> None:
    if decimals0 > CANONICAL_DECIMALS or decimals1 > CANONICAL_DECIMALS:
        raise InvalidData(
            f"Decimals must not exceed {CANONICAL_DECIMALS}, got ({decimals0}, {decimals1})"
        )


# =============================================================================
# Hybrid
# =============================================================================


def decode_hybrid_data(data: bytes) -> HybridParams:
    """Decode and validate a Hybrid parameter blob.

    Raises:
        InvalidData: If decimals exceed 18 or the amplifier is below 100
    """
    decimals0, decimals1, amplifier = split_data(data)
    _check_decimals(decimals0, decimals1)
    if amplifier < MIN_AMPLIFIER:
        raise InvalidData(f"Amplifier must be at least {MIN_AMPLIFIER}, got {amplifier}")
    return HybridParams(decimals0=decimals0, decimals1=decimals1, amplifier=amplifier)


def encode_hybrid_data(decimals0: int, decimals1: int, amplifier: int) -> bytes:
    """Encode Hybrid parameters. The result is not validated."""
    return join_data(decimals0, decimals1, amplifier)


# =============================================================================
# Weighted
# =============================================================================


def decode_weighted_data(data: bytes) -> WeightedParams:
    """Decode and validate a Weighted parameter blob.

    Raises:
        InvalidData: If decimals exceed 18, a weight is zero, or bits above
            the two weight bytes are set
    """
    decimals0, decimals1, field = split_data(data)
    _check_decimals(decimals0, decimals1)
    if field >> (2 * WEIGHT_BITS):
        raise InvalidData("Weighted field has bits set above the weight bytes")
    weight0 = (field >> WEIGHT_BITS) & _WEIGHT_MASK
    weight1 = field & _WEIGHT_MASK
    if weight0 == 0 or weight1 == 0:
        raise InvalidData(f"Weights must be positive, got ({weight0}, {weight1})")
    return WeightedParams(
        decimals0=decimals0, decimals1=decimals1, weight0=weight0, weight1=weight1
    )


def encode_weighted_data(decimals0: int, decimals1: int, weight0: int, weight1: int) -> bytes:
    """Encode Weighted parameters. The result is not validated.

    Raises:
        InvalidData: If a weight does not fit one byte
    """
    if not (0 <= weight0 <= _WEIGHT_MASK and 0 <= weight1 <= _WEIGHT_MASK):
        raise InvalidData(f"Weights must fit one byte, got ({weight0}, {weight1})")
    return join_data(decimals0, decimals1, (weight0 << WEIGHT_BITS) | weight1)
