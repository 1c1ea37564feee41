"""Safe integer wrapper for arithmetic on reserve-scale amounts.

This module provides SafeInt, a lightweight wrapper that makes arithmetic
operations safe by default:
- Division by zero raises DivisionByZero
- Subtraction underflow raises Underflow
- Narrowing to u64 (native balance width) or u128 (widened width) raises
  ArithmeticOverflow instead of truncating

Usage pattern:
    from amm_engine.safe_int import S, mul_div

    def ratio(amount: int, supply: int, reserve: int) -> int:
        # Wrap at entry
        sa, ss, sr = S(amount), S(supply), S(reserve)

        # Natural arithmetic - automatically safe
        product = (sa * ss).to_u128()   # Raises if the widened product overflows
        result = product // sr          # Raises if sr == 0

        # Narrow at exit
        return S(result).to_u64()
"""

from __future__ import annotations

U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    code = "arithmetic_error"


class DivisionByZero(SafeIntError):
    """Division by zero."""

    code = "division_by_zero"


class Underflow(SafeIntError):
    """Subtraction would produce negative result."""

    code = "underflow"


class ArithmeticOverflow(SafeIntError):
    """Value does not fit the requested unsigned width."""

    code = "arithmetic_overflow"


class SafeInt:
    """Integer with safe arithmetic operations.

    Wraps an integer and provides arithmetic operators that raise
    descriptive errors instead of producing invalid results:
    - Division by zero raises DivisionByZero
    - Negative results from subtraction raise Underflow
    - Values outside u64/u128 raise ArithmeticOverflow on to_u64()/to_u128()

    Python integers never overflow, so width is enforced at the points where
    a value crosses a width boundary: products are checked against u128 and
    final results are narrowed to u64.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Raises:
            TypeError: If value is not an int or SafeInt (bool is rejected)
        """
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

    def __hash__(self) -> int:
        return hash(self._value)

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
        """Integer division.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    # --- Named operations ---

    def min(self, other: SafeInt | int) -> SafeInt:
        """Return minimum of self and other."""
        return SafeInt(min(self._value, _extract_value(other)))

    def to_u64(self) -> int:
        """Narrow to the native balance width.

        Raises:
            ArithmeticOverflow: If value is negative or exceeds 2^64-1
        """
        return _narrow(self._value, U64_MAX, "u64")

    def to_u128(self) -> int:
        """Convert to int, validating the widened u128 bounds.

        Raises:
            ArithmeticOverflow: If value is negative or exceeds 2^128-1
        """
        return _narrow(self._value, U128_MAX, "u128")


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


def _narrow(value: int, limit: int, width: str) -> int:
    if value < 0:
        raise ArithmeticOverflow(f"Negative value cannot be {width}: {value}")
    if value > limit:
        raise ArithmeticOverflow(f"Value exceeds {width} max: {value}")
    return value


def mul_div(a: SafeInt | int, b: SafeInt | int, c: SafeInt | int) -> int:
    """Compute floor(a * b / c) in widened precision and narrow to u64.

    The product is validated against u128 before dividing, so two u64
    operands can never overflow the intermediate.

    Raises:
        DivisionByZero: If c is zero
        ArithmeticOverflow: If the product exceeds u128 or the quotient exceeds u64
    """
    product = (S(a) * S(b)).to_u128()
    return (S(product) // S(c)).to_u64()


# Convenience alias for concise code
S = SafeInt
