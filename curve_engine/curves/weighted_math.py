"""Weighted (constant-mean) curve math.

Core math functions for two-token weighted geometric-mean pools. Powers and
logarithms run in Q127 fixed point; every rounding step is biased so the pool
never pays out more, or asks for less, than the exact curve allows.
"""

from math import isqrt

from curve_engine.constants import PRICE_PRECISION
from curve_engine.errors import InsufficientLiquidity
from curve_engine.math.fixed_point import (
    ONE,
    PRECISION,
    div_down,
    div_up,
    exp,
    ln,
    mul_up,
    pow_down,
    pow_up,
)


def calc_out_given_in(
    balance_in: int,
    weight_in: int,
    balance_out: int,
    weight_out: int,
    amount_in: int,
) -> int:
    """Calculate output amount for a given input (sell order).

    Fee should be subtracted from amount_in BEFORE calling this function.

    Formula:
        amount_out = balance_out * (1 - (balance_in / (balance_in + amount_in))^(weight_in / weight_out))

    Equal weights reduce to the exact constant-product formula.

    Args:
        balance_in: Balance of input token (must be positive)
        weight_in: Weight of input token
        balance_out: Balance of output token (must be positive)
        weight_out: Weight of output token
        amount_in: Input amount (after fee subtraction)

    Returns:
        Output amount, rounded down
    """
    if weight_in == weight_out:
        return amount_in * balance_out // (balance_in + amount_in)

    # growth = ((balance_in + amount_in) / balance_in)^(weight_in / weight_out), rounded down
    growth = pow_down(div_down(balance_in + amount_in, balance_in), weight_in, weight_out)

    # amount_out = balance_out * (1 - 1 / growth), keeping balance_out / growth rounded up
    remaining = mul_up(balance_out, div_up(ONE, growth))
    return max(balance_out - remaining, 0)


def calc_in_given_out(
    balance_in: int,
    weight_in: int,
    balance_out: int,
    weight_out: int,
    amount_out: int,
) -> int:
    """Calculate input amount for a given output (buy order).

    Fee should be added to the result AFTER calling this function.

    Formula:
        amount_in = balance_in * ((balance_out / (balance_out - amount_out))^(weight_out / weight_in) - 1)

    Returns:
        Input amount before fee, rounded up

    Raises:
        InsufficientLiquidity: If amount_out >= balance_out
    """
    if amount_out >= balance_out:
        raise InsufficientLiquidity("amount_out must be less than balance_out")
    remaining = balance_out - amount_out

    if weight_in == weight_out:
        numerator = balance_in * amount_out
        return (numerator - 1) // remaining + 1 if numerator else 0

    # power = (balance_out / remaining)^(weight_out / weight_in), rounded up
    power = pow_up(div_up(balance_out, remaining), weight_out, weight_in)
    return mul_up(balance_in, power - ONE)


def calc_spot_price(
    balance_in: int,
    weight_in: int,
    balance_out: int,
    weight_out: int,
) -> int:
    """Marginal price of the input token in units of the output token.

    Formula:
        price = (balance_out / weight_out) / (balance_in / weight_in)

    Returns:
        Price as Q104 fixed point, rounded down
    """
    return (balance_out * weight_in << PRICE_PRECISION) // (balance_in * weight_out)


def calc_liquidity(balance0: int, weight0: int, balance1: int, weight1: int) -> int:
    """Weighted geometric mean of two balances.

    Formula:
        L = exp((weight0 * ln(balance0) + weight1 * ln(balance1)) / (weight0 + weight1))

    Equal balances and equal weights take exact integer paths; otherwise the
    mean is evaluated in Q127 and rounded down.

    Returns:
        The liquidity value (0 if either balance is empty)
    """
    if balance0 == 0 or balance1 == 0:
        return 0
    if balance0 == balance1:
        return balance0
    if weight0 == weight1:
        return isqrt(balance0 * balance1)

    log_mean = (
        weight0 * ln(balance0 << PRECISION) + weight1 * ln(balance1 << PRECISION)
    ) // (weight0 + weight1)
    return exp(log_mean) >> PRECISION
