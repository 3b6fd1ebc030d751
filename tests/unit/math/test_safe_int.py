"""Tests for SafeInt checked arithmetic."""

import pytest

from curve_engine.safe_int import (
    UINT256_MAX,
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Uint256Overflow,
    Underflow,
    as_uint256,
)


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(42)).value == 42

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_alias_s(self):
        assert S is SafeInt


class TestSafeIntArithmetic:
    """Tests for checked operators."""

    def test_add_mixed_operands(self):
        assert (S(2) + 3).value == 5
        assert (3 + S(2)).value == 5
        assert (S(2) + S(3)).value == 5

    def test_mul_mixed_operands(self):
        assert (S(6) * 7).value == 42
        assert (7 * S(6)).value == 42

    def test_sub(self):
        assert (S(10) - 4).value == 6
        assert (S(10) - 10).value == 0

    def test_sub_underflow(self):
        with pytest.raises(Underflow):
            S(3) - 4

    def test_floordiv(self):
        assert (S(10) // 3).value == 3

    def test_floordiv_by_zero(self):
        with pytest.raises(DivisionByZero):
            S(10) // 0
        with pytest.raises(DivisionByZero):
            S(10) // S(0)

    def test_abs_diff(self):
        assert S(5).abs_diff(8) == 3
        assert S(8).abs_diff(S(5)) == 3

    def test_errors_are_arithmetic_errors(self):
        """Callers can catch every SafeInt failure as ArithmeticError."""
        assert issubclass(SafeIntError, ArithmeticError)
        for cls in (Underflow, DivisionByZero, Uint256Overflow):
            assert issubclass(cls, SafeIntError)


class TestSafeIntComparison:
    def test_compare_with_int_and_safeint(self):
        assert S(5) == 5
        assert S(5) == S(5)
        assert S(4) < 5
        assert S(5) <= S(5)
        assert S(6) > 5
        assert S(6) >= S(6)

    def test_bool_and_int(self):
        assert not S(0)
        assert S(1)
        assert int(S(7)) == 7


class TestUint256Bounds:
    """Tests for uint256 validation at the boundary."""

    def test_to_uint256_accepts_range(self):
        assert S(0).to_uint256() == 0
        assert S(UINT256_MAX).to_uint256() == UINT256_MAX

    def test_to_uint256_rejects_overflow(self):
        with pytest.raises(Uint256Overflow):
            S(UINT256_MAX + 1).to_uint256()

    def test_to_uint256_rejects_negative(self):
        with pytest.raises(Uint256Overflow):
            S(-1).to_uint256()

    def test_as_uint256_names_the_argument(self):
        with pytest.raises(Uint256Overflow, match="reserve0"):
            as_uint256(-1, "reserve0")

    def test_as_uint256_rejects_non_int(self):
        with pytest.raises(TypeError):
            as_uint256("1")  # type: ignore
