"""Base interface for curve implementations."""

from typing import Any, Protocol, runtime_checkable

from curve_engine.errors import ResultOverflow
from curve_engine.safe_int import UINT256_MAX


@runtime_checkable
class Curve(Protocol):
    """Protocol for bonding-curve implementations.

    This defines the calling contract a pool uses to delegate its pricing
    math. Every method is a pure function of its arguments: curves keep no
    state between calls beyond their immutable configuration.

    Reserves are always passed in token order (reserve0, reserve1);
    token_in_index selects which of the two tokens is being sold.
    """

    def decode_data(self, data: bytes) -> Any:
        """Decode and validate a parameter blob.

        Raises:
            InvalidData: If the blob is malformed or out of range
        """
        ...

    def is_valid_data(self, data: bytes) -> bool:
        """Return True if decode_data would succeed."""
        ...

    def can_update_data(self, old_data: bytes, new_data: bytes) -> bool:
        """Return True if a pool may migrate from old_data to new_data in place."""
        ...

    def compute_amount_out(
        self,
        amount_in: int,
        reserve0: int,
        reserve1: int,
        data: bytes,
        swap_fee: int,
        token_in_index: int,
    ) -> int:
        """Calculate the output amount for an exact input.

        Args:
            amount_in: Input amount in the input token's native decimals
            reserve0: Pool reserve of token0
            reserve1: Pool reserve of token1
            data: Curve parameter blob
            swap_fee: Fee in parts per FEE_DENOMINATOR
            token_in_index: 0 if token0 is sold, 1 if token1 is sold

        Returns:
            Output amount in the output token's native decimals
        """
        ...

    def compute_amount_in(
        self,
        amount_out: int,
        reserve0: int,
        reserve1: int,
        data: bytes,
        swap_fee: int,
        token_in_index: int,
    ) -> int:
        """Calculate the input required for an exact output.

        Returns:
            Input amount in the input token's native decimals
        """
        ...

    def compute_liquidity(self, reserve0: int, reserve1: int, data: bytes) -> int:
        """Value the pool's liquidity in canonical 18-decimal units."""
        ...


def check_token_index(token_in_index: int) -> None:
    """Validate a swap direction.

    Raises:
        IndexError: If token_in_index is not 0 or 1
    """
    if token_in_index not in (0, 1):
        raise IndexError(f"token_in_index must be 0 or 1, got {token_in_index}")


def check_result(value: int, name: str) -> int:
    """Return value if it fits in a uint256 word.

    Raises:
        ResultOverflow: If value exceeds 2^256-1
    """
    if value > UINT256_MAX:
        raise ResultOverflow(f"{name} exceeds uint256 max: {value}")
    return value
