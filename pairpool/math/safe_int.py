"""Checked integer arithmetic for reserve and share quantities.

Every quantity the pool and router handle (reserves, share supply, transfer
amounts) is a non-negative integer in base units. SafeInt wraps such a value
so that the two mistakes that matter for an AMM fail loudly instead of
producing a wrong number:

- Subtraction below zero raises Underflow
- Division (floor or ceiling) by zero raises DivisionByZero

Usage pattern:
    from pairpool.math import S

    def shares_for(amount: int, supply: int, reserve: int) -> int:
        return (S(amount) * supply // reserve).value

The module also provides the three helpers the pool math is built from:
isqrt (first-deposit share issuance), mul_div (round down, in the pool's
favour) and mul_div_up (round up, used when quoting what a caller must pay).
"""

from __future__ import annotations

import math

UINT256_MAX = 2**256 - 1


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Floor or ceiling division by zero."""

    pass


class Underflow(SafeIntError):
    """A subtraction or square root would leave the non-negative range."""

    pass


class SafeInt:
    """Non-negative integer quantity with checked arithmetic.

    Addition and multiplication behave like plain ints. Subtraction refuses
    to go negative and division refuses a zero divisor. Comparisons accept
    either SafeInt or int on the other side.

    Attributes:
        value: The wrapped integer (read-only)
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
        """The wrapped integer."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _unwrap(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract, raising Underflow if the result would be negative."""
        other_val = _unwrap(other)
        if other_val > self._value:
            raise Underflow(f"Underflow: {self._value} - {other_val}")
        return SafeInt(self._value - other_val)

    def __rsub__(self, other: int) -> SafeInt:
        if self._value > other:
            raise Underflow(f"Underflow: {other} - {self._value}")
        return SafeInt(other - self._value)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _unwrap(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Floor division, raising DivisionByZero on a zero divisor."""
        other_val = _unwrap(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __rfloordiv__(self, other: int) -> SafeInt:
        if self._value == 0:
            raise DivisionByZero(f"Division by zero: {other} // 0")
        return SafeInt(other // self._value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _unwrap(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _unwrap(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _unwrap(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _unwrap(other)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Division rounding up: (self + other - 1) // other.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _unwrap(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        return SafeInt(-(-self._value // other_val))


def _unwrap(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


def isqrt(n: int) -> int:
    """Floor of the square root of a non-negative integer.

    Raises:
        Underflow: If n is negative
    """
    if n < 0:
        raise Underflow(f"Square root of negative value: {n}")
    return math.isqrt(n)


def mul_div(a: int, b: int, denominator: int) -> int:
    """floor(a * b / denominator) without intermediate rounding."""
    return ((S(a) * b) // denominator).value


def mul_div_up(a: int, b: int, denominator: int) -> int:
    """ceil(a * b / denominator) without intermediate rounding."""
    return (S(a) * b).ceiling_div(denominator).value


# Short alias used throughout the pool and router math
S = SafeInt
