"""Tests for weighted (constant-mean) curve math.

Exact real-valued references are computed with Decimal; every integer
result must sit on the pool's side of them.
"""

from decimal import Decimal, localcontext
from math import isqrt

import pytest

from curve_engine.curves.weighted_math import (
    calc_in_given_out,
    calc_liquidity,
    calc_out_given_in,
    calc_spot_price,
)
from curve_engine.errors import InsufficientLiquidity

ONE_18 = 10**18


def exact_out(balance_in, weight_in, balance_out, weight_out, amount_in) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = 60
        ratio = Decimal(balance_in) / Decimal(balance_in + amount_in)
        return Decimal(balance_out) * (1 - ratio ** (Decimal(weight_in) / Decimal(weight_out)))


def exact_in(balance_in, weight_in, balance_out, weight_out, amount_out) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = 60
        ratio = Decimal(balance_out) / Decimal(balance_out - amount_out)
        return Decimal(balance_in) * (ratio ** (Decimal(weight_out) / Decimal(weight_in)) - 1)


POOLS = [
    (ONE_18, 20, ONE_18, 80),
    (ONE_18, 80, ONE_18, 20),
    (3 * ONE_18, 30, 7 * ONE_18, 70),
    (123 * ONE_18, 1, 456 * 10**6, 255),
]


class TestCalcOutGivenIn:
    def test_reference_vector(self):
        assert calc_out_given_in(ONE_18, 20, ONE_18, 80, 10**17) == 23545910323679690

    def test_equal_weights_is_constant_product(self):
        assert calc_out_given_in(ONE_18, 50, ONE_18, 50, 10**17) == 90909090909090909

    @pytest.mark.parametrize("pool", POOLS)
    @pytest.mark.parametrize("fraction", [1000, 100, 10, 4])
    def test_never_pays_more_than_exact(self, pool, fraction: int):
        balance_in, weight_in, balance_out, weight_out = pool
        amount_in = balance_in // fraction
        result = calc_out_given_in(balance_in, weight_in, balance_out, weight_out, amount_in)
        exact = exact_out(balance_in, weight_in, balance_out, weight_out, amount_in)
        assert result <= exact
        assert exact - result <= balance_out * Decimal("1e-13") + 2

    def test_tiny_input_pays_nothing(self):
        """Inputs below the power error margin round to zero output."""
        assert calc_out_given_in(ONE_18, 20, ONE_18, 80, 1) == 0


class TestCalcInGivenOut:
    def test_reference_vector(self):
        assert calc_in_given_out(ONE_18, 20, ONE_18, 80, 10**17) == 524157902758741046

    def test_equal_weights_rounds_up(self):
        assert calc_in_given_out(ONE_18, 50, ONE_18, 50, 10**17) == 111111111111111112

    @pytest.mark.parametrize("pool", POOLS)
    @pytest.mark.parametrize("fraction", [1000, 100, 10, 4])
    def test_never_asks_less_than_exact(self, pool, fraction: int):
        balance_in, weight_in, balance_out, weight_out = pool
        amount_out = balance_out // fraction
        result = calc_in_given_out(balance_in, weight_in, balance_out, weight_out, amount_out)
        exact = exact_in(balance_in, weight_in, balance_out, weight_out, amount_out)
        assert result >= exact
        assert result - exact <= exact * Decimal("1e-12") + balance_in * Decimal("1e-13")

    @pytest.mark.parametrize("amount_out", [ONE_18, ONE_18 + 1])
    def test_cannot_drain_pool(self, amount_out: int):
        with pytest.raises(InsufficientLiquidity):
            calc_in_given_out(ONE_18, 20, ONE_18, 80, amount_out)


class TestCalcSpotPrice:
    def test_weights_scale_price(self):
        """Selling the 20-weight token against an 80-weight token of equal balance."""
        assert calc_spot_price(ONE_18, 20, ONE_18, 80) == (1 << 104) // 4
        assert calc_spot_price(ONE_18, 80, ONE_18, 20) == 4 << 104

    def test_raw_units(self):
        """Price is in raw output units per raw input unit."""
        assert calc_spot_price(ONE_18, 50, 10**6, 50) == 20282409603651670423


class TestCalcLiquidity:
    def test_reference_vector(self):
        assert calc_liquidity(ONE_18, 20, 4 * ONE_18, 80) == 3031433133020796164

    def test_matches_geometric_mean(self):
        balance0, balance1 = 123 * ONE_18, 456 * ONE_18
        result = calc_liquidity(balance0, 30, balance1, 70)
        with localcontext() as ctx:
            ctx.prec = 60
            exact = Decimal(balance0) ** Decimal("0.3") * Decimal(balance1) ** Decimal("0.7")
        assert abs(result - exact) <= exact * Decimal("1e-20") + 1

    def test_equal_balances_are_exact(self):
        assert calc_liquidity(5 * ONE_18, 1, 5 * ONE_18, 255) == 5 * ONE_18

    def test_equal_weights_use_integer_sqrt(self):
        assert calc_liquidity(ONE_18, 7, 4 * ONE_18, 7) == 2 * ONE_18
        assert calc_liquidity(3, 1, 5, 1) == isqrt(15)

    @pytest.mark.parametrize("balance0,balance1", [(0, ONE_18), (ONE_18, 0), (0, 0)])
    def test_empty_reserve(self, balance0: int, balance1: int):
        assert calc_liquidity(balance0, 20, balance1, 80) == 0
