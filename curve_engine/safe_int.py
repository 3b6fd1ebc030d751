"""Checked integer arithmetic for the invariant solvers.

The curve math runs on unbounded Python ints, but the values it models are
uint256 words. SafeInt makes the failure modes of that domain explicit:
- Subtraction below zero raises Underflow
- Division by zero raises DivisionByZero
- Values outside [0, 2^256) raise Uint256Overflow on to_uint256()

Usage pattern:
    from curve_engine.safe_int import S

    d = S(invariant)
    c = (d * d) // (S(x) * 2)     # raises if x == 0
    dy = S(reserve_out) - y - 1   # raises if y >= reserve_out
    return dy.value
"""

from __future__ import annotations

UINT256_MAX = 2**256 - 1


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce a negative result."""

    pass


class Uint256Overflow(SafeIntError):
    """Value does not fit in a uint256 word."""

    pass


class SafeInt:
    """Non-negative integer with checked subtraction and division.

    Addition and multiplication are exact (Python ints never overflow);
    range is enforced once, at the boundary, with to_uint256().
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    __radd__ = __add__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    __rmul__ = __mul__

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Floor division.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def abs_diff(self, other: SafeInt | int) -> int:
        """Absolute difference |self - other| as a plain int."""
        return abs(self._value - _extract_value(other))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def to_uint256(self) -> int:
        """Convert to int, validating uint256 bounds.

        Raises:
            Uint256Overflow: If value is negative or exceeds 2^256-1
        """
        if self._value < 0:
            raise Uint256Overflow(f"Negative value cannot be uint256: {self._value}")
        if self._value > UINT256_MAX:
            raise Uint256Overflow(f"Value exceeds uint256 max: {self._value}")
        return self._value


def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


def as_uint256(value: int, name: str = "value") -> int:
    """Validate a caller-supplied integer as a uint256 word.

    Raises:
        TypeError: If value is not an int
        Uint256Overflow: If value is negative or exceeds 2^256-1
    """
    try:
        return SafeInt(value).to_uint256()
    except Uint256Overflow as err:
        raise Uint256Overflow(f"{name}: {err}") from err


# Convenience alias for concise code
S = SafeInt
