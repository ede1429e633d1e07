"""Native backend - hardware float/int arithmetic.

Fastest backend, limited by IEEE 754 double precision. Integral operands stay
Python ints (and so exact); anything with a fraction becomes a float.
``round``, ``ceil``, ``floor`` and ``sqrt`` always return floats, even for whole
results; callers may rely on that.
"""

from __future__ import annotations

import math
from decimal import Decimal

from numerus.backends.protocol import BackendKind, Operand
from numerus.errors import DivisionByZeroError, NumberParseError, UnsupportedOperationError
from numerus.rounding import RoundingMode, round_float


def _to_number(value: Operand) -> int | float:
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric operand")
    if isinstance(value, int | float):
        return value
    if isinstance(value, Decimal):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError as e:
            raise NumberParseError(value) from e
    else:
        raise TypeError(f"Unsupported operand type: {type(value).__name__}")

    if math.isfinite(number) and number.is_integer():
        return int(number)
    return number


class NativeBackend:
    """Backend over Python's built-in numeric types. Scale-less."""

    @property
    def kind(self) -> BackendKind:
        return BackendKind.NATIVE

    @property
    def scale(self) -> None:
        return None

    def add(self, a: Operand, b: Operand) -> int | float:
        return _to_number(a) + _to_number(b)

    def subtract(self, a: Operand, b: Operand) -> int | float:
        return _to_number(a) - _to_number(b)

    def multiply(self, a: Operand, b: Operand) -> int | float:
        return _to_number(a) * _to_number(b)

    def divide(self, a: Operand, b: Operand) -> float:
        divisor = _to_number(b)
        if divisor == 0:
            raise DivisionByZeroError(operation="divide")
        return _to_number(a) / divisor

    def mod(self, a: Operand, b: Operand) -> int | float:
        dividend, divisor = _to_number(a), _to_number(b)
        if divisor == 0:
            raise DivisionByZeroError("Modulo by zero", operation="mod")
        if isinstance(dividend, int) and isinstance(divisor, int):
            remainder = abs(dividend) % abs(divisor)
            return -remainder if dividend < 0 else remainder
        return math.fmod(dividend, divisor)

    def abs(self, value: Operand) -> int | float:
        return abs(_to_number(value))

    def ceil(self, value: Operand) -> float:
        return float(math.ceil(_to_number(value)))

    def floor(self, value: Operand) -> float:
        return float(math.floor(_to_number(value)))

    def round(
        self,
        value: Operand,
        precision: int = 0,
        mode: RoundingMode | None = None,
    ) -> float:
        return round_float(float(_to_number(value)), precision, mode)

    def power(self, base: Operand, exponent: int | float) -> int | float:
        number = _to_number(base)
        if number < 0 and not float(exponent).is_integer():
            raise UnsupportedOperationError(
                "Fractional exponent of a negative base has no real result",
                operation="power",
            )
        try:
            return number**exponent
        except ZeroDivisionError as e:
            raise DivisionByZeroError(
                "Zero cannot be raised to a negative power", operation="power"
            ) from e

    def sqrt(self, value: Operand) -> float:
        number = _to_number(value)
        if number < 0:
            raise UnsupportedOperationError(
                "Cannot calculate square root of negative number", operation="sqrt"
            )
        return math.sqrt(number)

    def compare(self, a: Operand, b: Operand) -> int:
        left, right = _to_number(a), _to_number(b)
        return (left > right) - (left < right)

    def integer_part(self, value: Operand) -> int:
        return int(_to_number(value))

    def fractional_part(self, value: Operand) -> int | float:
        number = _to_number(value)
        return abs(number - int(number))

    def negate(self, value: Operand) -> int | float:
        return -_to_number(value)

    def min(self, a: Operand, b: Operand) -> int | float:
        return min(_to_number(a), _to_number(b))

    def max(self, a: Operand, b: Operand) -> int | float:
        return max(_to_number(a), _to_number(b))

    def __repr__(self) -> str:
        return "NativeBackend()"
