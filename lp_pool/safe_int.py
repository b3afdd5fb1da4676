"""Checked integer wrapper for pool arithmetic.

Python integers never overflow, so every multiply-then-divide step already
has a wide enough intermediate. What they do not give us is the unsigned
behavior of on-chain amounts: a subtraction may silently go negative and a
result may no longer fit in 64 bits. SafeInt makes those cases raise:

- Division by zero raises DivisionByZero
- Subtraction underflow raises Underflow
- Values outside [0, 2**64 - 1] raise U64Overflow on to_u64()

Usage pattern:
    from lp_pool.safe_int import S

    def gross_amount(amount: int, price: int) -> int:
        return (S(amount) * price // SCALE).to_u64()
"""

from __future__ import annotations

from lp_pool.constants import U64_MAX


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce negative result."""

    pass


class U64Overflow(SafeIntError):
    """Value does not fit in an unsigned 64-bit integer."""

    pass


class SafeInt:
    """Integer with checked arithmetic operations.

    Attributes:
        value: The underlying integer value (read-only)
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

    def __str__(self) -> str:
        return str(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

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

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Floor division.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    # --- Named operations ---

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Ceiling division (rounds up).

        Equivalent to: (self + other - 1) // other

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        return SafeInt((self._value + other_val - 1) // other_val)

    def max(self, other: SafeInt | int) -> SafeInt:
        """Return maximum of self and other."""
        return SafeInt(max(self._value, _extract_value(other)))

    def checked_sub(self, other: SafeInt | int) -> SafeInt | None:
        """Subtract, returning None on underflow instead of raising."""
        result = self._value - _extract_value(other)
        if result < 0:
            return None
        return SafeInt(result)

    def to_u64(self) -> int:
        """Convert to int, validating u64 bounds.

        Raises:
            U64Overflow: If value is negative or exceeds 2**64 - 1
        """
        if self._value < 0:
            raise U64Overflow(f"Negative value cannot be u64: {self._value}")
        if self._value > U64_MAX:
            raise U64Overflow(f"Value exceeds u64 max: {self._value}")
        return self._value

    def is_u64(self) -> bool:
        """Check if value fits in u64 without raising."""
        return 0 <= self._value <= U64_MAX


def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
