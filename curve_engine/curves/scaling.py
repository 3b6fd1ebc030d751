"""Decimal scaling and fee helpers.

Functions for rescaling token amounts between native decimals and the
canonical 18-decimal domain, and for applying swap fees expressed in parts
per FEE_DENOMINATOR.
"""

from curve_engine.constants import CANONICAL_DECIMALS, FEE_DENOMINATOR, MAX_SWAP_FEE
from curve_engine.errors import InvalidData, InvalidSwapFee


def scaling_factor(decimals: int) -> int:
    """Return 10^(18 - decimals), the factor into the canonical domain.

    Raises:
        InvalidData: If decimals is outside [0, 18]
    """
    if not 0 <= decimals <= CANONICAL_DECIMALS:
        raise InvalidData(f"Decimals must be in [0, {CANONICAL_DECIMALS}], got {decimals}")
    return 10 ** (CANONICAL_DECIMALS - decimals)


def to_canonical(amount: int, decimals: int) -> int:
    """Scale an amount in native decimals up to 18 decimals.

    Args:
        amount: Amount in the token's native decimals
        decimals: Token decimals (e.g., 6 for USDC)

    Returns:
        Amount in 18-decimal fixed point
    """
    return amount * scaling_factor(decimals)


def from_canonical(amount: int, decimals: int) -> int:
    """Scale an 18-decimal amount back to native decimals, rounding down."""
    return amount // scaling_factor(decimals)


def from_canonical_up(amount: int, decimals: int) -> int:
    """Scale an 18-decimal amount back to native decimals, rounding up."""
    factor = scaling_factor(decimals)
    if amount == 0:
        return 0
    return (amount - 1) // factor + 1


def check_swap_fee(fee: int, max_fee: int = MAX_SWAP_FEE) -> None:
    """Validate a swap fee.

    Raises:
        InvalidSwapFee: If fee is negative or exceeds max_fee
    """
    if not 0 <= fee <= max_fee:
        raise InvalidSwapFee(f"Swap fee must be in range [0, {max_fee}], got {fee}")


def subtract_swap_fee(amount: int, fee: int) -> int:
    """Remove the swap fee from an amount, rounding down.

    Used on the side the pool pays out (or receives net), so the fee is
    always rounded in the pool's favour.

    Args:
        amount: Amount before fee
        fee: Fee in parts per FEE_DENOMINATOR (e.g., 3 for 0.3%)

    Returns:
        amount * (FEE_DENOMINATOR - fee) // FEE_DENOMINATOR
    """
    check_swap_fee(fee, FEE_DENOMINATOR - 1)
    return amount * (FEE_DENOMINATOR - fee) // FEE_DENOMINATOR


def add_swap_fee(amount: int, fee: int) -> int:
    """Gross an amount up by the swap fee, rounding up.

    Inverse of subtract_swap_fee: the smallest gross amount whose net value
    is at least the requested amount.

    Formula: ceil(amount * FEE_DENOMINATOR / (FEE_DENOMINATOR - fee))
    """
    check_swap_fee(fee, FEE_DENOMINATOR - 1)
    numerator = amount * FEE_DENOMINATOR
    if numerator == 0:
        return 0
    return (numerator - 1) // (FEE_DENOMINATOR - fee) + 1
