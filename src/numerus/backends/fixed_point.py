"""Fixed-point backend - decimals as integers scaled by ``10**scale``.

Every operand is encoded through the scaled-decimal codec, the operation runs
on Python's arbitrary-precision ints, and the result is decoded back to a
plain decimal string. Division truncates toward zero, so every result is the
exact value truncated to ``scale`` fractional digits.

Only operations expressible in integer arithmetic are supported: ``power``
accepts non-negative integer exponents only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from numerus.backends import capabilities
from numerus.backends.protocol import DEFAULT_SCALE, BackendKind, Operand
from numerus.codec import DecimalValue, decode, encode, plain_string
from numerus.errors import (
    CapabilityUnavailableError,
    DivisionByZeroError,
    UnsupportedOperationError,
)
from numerus.rounding import RoundingMode, round_decimal


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


@dataclass(frozen=True)
class FixedPointBackend:
    """Backend over scaled integers.

    Attributes:
        scale: Fractional digits carried by every operand and result.
    """

    scale: int = DEFAULT_SCALE

    def __post_init__(self) -> None:
        """Validate the scale and probe the runtime.

        Raises:
            ValueError: If scale is negative or not an int.
            CapabilityUnavailableError: If integers of ``scale + 1`` digits
                cannot round-trip through the scaled-decimal codec.
        """
        if isinstance(self.scale, bool) or not isinstance(self.scale, int) or self.scale < 0:
            raise ValueError(f"scale must be a non-negative integer, got {self.scale!r}")
        if not capabilities.has_arbitrary_precision_integers(self.scale + 1):
            raise CapabilityUnavailableError(
                capabilities.ARBITRARY_PRECISION_INTEGERS,
                backend=BackendKind.FIXED_POINT.value,
            )

    @property
    def kind(self) -> BackendKind:
        return BackendKind.FIXED_POINT

    @property
    def factor(self) -> int:
        """The scale factor ``10**scale``."""
        return 10**self.scale

    def _encode(self, value: Operand) -> int:
        return encode(value, self.scale)

    def _decode(self, unscaled: int) -> str:
        return decode(unscaled, self.scale)

    def _encode_divisor(self, value: Operand, operation: str) -> int:
        divisor = self._encode(value)
        if divisor == 0:
            raise DivisionByZeroError(operation=operation)
        return divisor

    def add(self, a: Operand, b: Operand) -> str:
        return self._decode(self._encode(a) + self._encode(b))

    def subtract(self, a: Operand, b: Operand) -> str:
        return self._decode(self._encode(a) - self._encode(b))

    def multiply(self, a: Operand, b: Operand) -> str:
        return self._decode(_tdiv(self._encode(a) * self._encode(b), self.factor))

    def divide(self, a: Operand, b: Operand) -> str:
        divisor = self._encode_divisor(b, "divide")
        return self._decode(_tdiv(self._encode(a) * self.factor, divisor))

    def mod(self, a: Operand, b: Operand) -> str:
        divisor = self._encode_divisor(b, "mod")
        dividend = self._encode(a)
        return self._decode(dividend - divisor * _tdiv(dividend, divisor))

    def abs(self, value: Operand) -> str:
        return self._decode(abs(self._encode(value)))

    def ceil(self, value: Operand) -> str:
        scaled = self._encode(value)
        quotient = _tdiv(scaled, self.factor)
        # The remainder carries the sign of the value.
        if scaled - quotient * self.factor > 0:
            quotient += 1
        return self._decode(quotient * self.factor)

    def floor(self, value: Operand) -> str:
        scaled = self._encode(value)
        quotient = _tdiv(scaled, self.factor)
        if scaled - quotient * self.factor < 0:
            quotient -= 1
        return self._decode(quotient * self.factor)

    def round(
        self,
        value: Operand,
        precision: int = 0,
        mode: RoundingMode | None = None,
    ) -> str:
        exact = DecimalValue.from_unscaled(self._encode(value), self.scale).to_decimal()
        return plain_string(round_decimal(exact, precision, mode))

    def power(self, base: Operand, exponent: int | float) -> str:
        """Raise ``base`` to a non-negative integer power.

        ``base**n`` at scale ``s`` is ``encoded**n / 10**(s*n)``; re-expressed at
        scale ``s`` that is one truncating division by ``10**(s*(n-1))``.

        Raises:
            UnsupportedOperationError: If the exponent is fractional or negative.
        """
        if isinstance(exponent, bool) or not isinstance(exponent, int) or exponent < 0:
            raise UnsupportedOperationError(
                "Fixed-point backend only supports non-negative integer exponents, "
                f"got {exponent!r}",
                operation="power",
            )
        if exponent == 0:
            return self._decode(self.factor)

        scaled = self._encode(base) ** exponent
        return self._decode(_tdiv(scaled, self.factor ** (exponent - 1)))

    def sqrt(self, value: Operand) -> str:
        scaled = self._encode(value)
        if scaled < 0:
            raise UnsupportedOperationError(
                "Cannot calculate square root of negative number", operation="sqrt"
            )
        return self._decode(math.isqrt(scaled * self.factor))

    def compare(self, a: Operand, b: Operand) -> int:
        difference = self._encode(a) - self._encode(b)
        return (difference > 0) - (difference < 0)

    def integer_part(self, value: Operand) -> int:
        return _tdiv(self._encode(value), self.factor)

    def fractional_part(self, value: Operand) -> str:
        scaled = self._encode(value)
        return self._decode(abs(scaled - _tdiv(scaled, self.factor) * self.factor))

    def negate(self, value: Operand) -> str:
        return self._decode(-self._encode(value))

    def min(self, a: Operand, b: Operand) -> str:
        left, right = self._encode(a), self._encode(b)
        return self._decode(left if left <= right else right)

    def max(self, a: Operand, b: Operand) -> str:
        left, right = self._encode(a), self._encode(b)
        return self._decode(left if left >= right else right)
