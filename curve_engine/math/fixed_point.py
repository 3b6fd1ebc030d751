"""Q127 binary fixed-point math.

This module implements the natural logarithm and exponential used by the
weighted curve. All values are integers scaled by 2^127 (Q127), which keeps
the relative error of ln/exp far below 1e-8 without any floating point.

- ln() extracts the integer part of log2 with a bit scan, then produces one
  fractional bit per squaring step.
- exp() range-reduces by ln(2), sums a Taylor series on the remainder and
  shifts the result back up.

Every loop is bounded: 127 squaring steps for ln, MAX_EXP_TERMS series terms
for exp.
"""

from __future__ import annotations

from curve_engine.errors import CurveError

__all__ = [
    # Errors
    "FixedPointError",
    "InvalidLogInput",
    "InvalidExponent",
    # Functions
    "floor_log2",
    "ln",
    "exp",
    "pow_raw",
    "pow_down",
    "pow_up",
    "div_down",
    "div_up",
    "mul_up",
    # Constants
    "PRECISION",
    "ONE",
    "LN2",
    "MAX_NATURAL_EXPONENT",
    "MIN_NATURAL_EXPONENT",
]

# =============================================================================
# Constants
# =============================================================================

PRECISION = 127
ONE = 1 << PRECISION
TWO = 2 * ONE

# floor(ln(2) * 2^127)
LN2 = 117932881612756647068972071382077242199

# e^177 < 2^256: results above this no longer fit a uint256 word
MAX_NATURAL_EXPONENT = 177 * ONE
MIN_NATURAL_EXPONENT = -MAX_NATURAL_EXPONENT

# The remainder after range reduction is below ln(2), so the series
# terms vanish well before this cap
MAX_EXP_TERMS = 64

# 10^-14 relative error allowance applied by pow_down / pow_up
MAX_POW_RELATIVE_ERROR = ONE // 10**14


# =============================================================================
# Error classes
# =============================================================================


class FixedPointError(CurveError):
    """Base error for fixed-point math."""

    pass


class InvalidLogInput(FixedPointError):
    """Logarithm argument must be positive."""

    pass


class InvalidExponent(FixedPointError):
    """Exponent is outside [MIN_NATURAL_EXPONENT, MAX_NATURAL_EXPONENT]."""

    pass


# =============================================================================
# Rounding helpers
# =============================================================================


def mul_up(a: int, b: int) -> int:
    """Q127 multiply with ceiling rounding (non-negative operands)."""
    product = a * b
    if product == 0:
        return 0
    return ((product - 1) >> PRECISION) + 1


def div_down(a: int, b: int) -> int:
    """Q127 ratio a / b rounded down."""
    if b == 0:
        raise ZeroDivisionError("Q127 division by zero")
    return (a << PRECISION) // b


def div_up(a: int, b: int) -> int:
    """Q127 ratio a / b rounded up."""
    if b == 0:
        raise ZeroDivisionError("Q127 division by zero")
    numerator = a << PRECISION
    if numerator == 0:
        return 0
    return (numerator - 1) // b + 1


# =============================================================================
# Core functions
# =============================================================================


def floor_log2(n: int) -> int:
    """Return floor(log2(n)) for a positive integer n."""
    if n <= 0:
        raise InvalidLogInput(f"floor_log2 requires a positive integer, got {n}")
    return n.bit_length() - 1


def ln(x: int) -> int:
    """Compute the natural logarithm of a Q127 value.

    Args:
        x: Input in Q127, must be positive.

    Returns:
        ln(x) in Q127 (negative when x < ONE).

    Raises:
        InvalidLogInput: If x <= 0
    """
    if x <= 0:
        raise InvalidLogInput(f"ln requires a positive argument, got {x}")

    if x < ONE:
        # ln(x) = -ln(1/x)
        return -ln((ONE * ONE) // x)

    result = 0

    # Integer part of log2 via bit scan
    if x >= TWO:
        count = floor_log2(x >> PRECISION)
        x >>= count
        result = count * ONE

    # Fractional bits: squaring doubles log2(x), a carry past 2 emits a 1 bit
    if x > ONE:
        for i in range(PRECISION, 0, -1):
            x = (x * x) >> PRECISION
            if x >= TWO:
                x >>= 1
                result += 1 << (i - 1)

    # log2 -> ln
    return (result * LN2) >> PRECISION


def exp(x: int) -> int:
    """Compute e^x for a Q127 exponent.

    Args:
        x: Exponent in Q127 (may be negative).

    Returns:
        e^x in Q127.

    Raises:
        InvalidExponent: If x is outside [MIN_NATURAL_EXPONENT, MAX_NATURAL_EXPONENT]
    """
    if not (MIN_NATURAL_EXPONENT <= x <= MAX_NATURAL_EXPONENT):
        raise InvalidExponent(f"Exponent {x} outside valid range")

    if x < 0:
        # e^-x = 1 / e^x
        return (ONE * ONE) // exp(-x)

    # x = k * ln(2) + r, 0 <= r < ln(2)
    k, r = divmod(x, LN2)

    # Taylor series: e^r = 1 + r + r^2/2! + ...
    series_sum = ONE
    term = ONE
    for i in range(1, MAX_EXP_TERMS + 1):
        term = ((term * r) >> PRECISION) // i
        if term == 0:
            break
        series_sum += term

    return series_sum << k


def pow_raw(base: int, exponent_n: int, exponent_d: int) -> int:
    """Compute base^(exponent_n / exponent_d).

    Args:
        base: Q127 base, must be positive
        exponent_n: Exponent numerator (non-negative integer)
        exponent_d: Exponent denominator (positive integer)

    Returns:
        The power in Q127.
    """
    if exponent_d <= 0:
        raise InvalidExponent(f"Exponent denominator must be positive, got {exponent_d}")
    if exponent_n == 0:
        return ONE
    if exponent_n == exponent_d:
        return base
    return exp(ln(base) * exponent_n // exponent_d)


def _max_pow_error(raw: int) -> int:
    return mul_up(raw, MAX_POW_RELATIVE_ERROR) + 1


def pow_down(base: int, exponent_n: int, exponent_d: int) -> int:
    """Compute base^(exponent_n / exponent_d), biased below the exact value."""
    raw = pow_raw(base, exponent_n, exponent_d)
    max_error = _max_pow_error(raw)
    if raw < max_error:
        return 0
    return raw - max_error


def pow_up(base: int, exponent_n: int, exponent_d: int) -> int:
    """Compute base^(exponent_n / exponent_d), biased above the exact value."""
    raw = pow_raw(base, exponent_n, exponent_d)
    return raw + _max_pow_error(raw)
