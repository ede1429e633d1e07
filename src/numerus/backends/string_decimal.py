"""String-decimal backend - ``decimal.Decimal`` arithmetic at a fixed scale.

Each operation runs in a local copy of an exact context, so the backend is
safe to share across threads and tasks. Results are truncated toward zero to
``scale`` fractional digits and rendered with exactly ``scale`` digits:

    StringDecimalBackend(scale=4).divide("1", "3") -> "0.3333"
    StringDecimalBackend(scale=2).add("1", "2")    -> "3.00"

This is the reference backend: the fixed-point backend is checked against it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal

from numerus.backends import capabilities
from numerus.backends.protocol import DEFAULT_SCALE, BackendKind, Operand
from numerus.codec import bounded_context, exact_context, plain_string, split_parts, to_decimal
from numerus.errors import (
    CapabilityUnavailableError,
    DivisionByZeroError,
    UnsupportedOperationError,
)
from numerus.rounding import RoundingMode, round_decimal

# Extra significant digits carried by inexact operations before truncation.
_GUARD_DIGITS = 2


@dataclass(frozen=True)
class StringDecimalBackend:
    """Backend over ``decimal.Decimal``.

    Attributes:
        scale: Fractional digits kept in every result.
    """

    scale: int = DEFAULT_SCALE

    def __post_init__(self) -> None:
        """Validate the scale and probe the runtime.

        Raises:
            ValueError: If scale is negative or not an int.
            CapabilityUnavailableError: If decimal arithmetic cannot carry
                ``scale + 1`` significant digits.
        """
        if isinstance(self.scale, bool) or not isinstance(self.scale, int) or self.scale < 0:
            raise ValueError(f"scale must be a non-negative integer, got {self.scale!r}")
        if not capabilities.has_decimal_arithmetic(self.scale + 1):
            raise CapabilityUnavailableError(
                capabilities.DECIMAL_ARITHMETIC,
                backend=BackendKind.STRING_DECIMAL.value,
            )

    @property
    def kind(self) -> BackendKind:
        return BackendKind.STRING_DECIMAL

    @property
    def quantum(self) -> Decimal:
        """The smallest representable step, ``10**-scale``."""
        return Decimal(1).scaleb(-self.scale)

    def _result(self, value: Decimal) -> str:
        with exact_context() as ctx:
            truncated = value.quantize(self.quantum, rounding=ROUND_DOWN, context=ctx)
        return plain_string(truncated)

    def _digits_for(self, magnitude: int) -> int:
        """Significant digits needed for a result of ``magnitude`` integer digits."""
        return max(magnitude, 0) + self.scale + _GUARD_DIGITS

    def _divide(self, a: Decimal, b: Decimal, operation: str) -> Decimal:
        if b.is_zero():
            raise DivisionByZeroError(operation=operation)
        if a.is_zero():
            return Decimal(0)
        with bounded_context(self._digits_for(a.adjusted() - b.adjusted() + 1)) as ctx:
            return ctx.divide(a, b)

    def add(self, a: Operand, b: Operand) -> str:
        with exact_context() as ctx:
            return self._result(ctx.add(to_decimal(a), to_decimal(b)))

    def subtract(self, a: Operand, b: Operand) -> str:
        with exact_context() as ctx:
            return self._result(ctx.subtract(to_decimal(a), to_decimal(b)))

    def multiply(self, a: Operand, b: Operand) -> str:
        with exact_context() as ctx:
            return self._result(ctx.multiply(to_decimal(a), to_decimal(b)))

    def divide(self, a: Operand, b: Operand) -> str:
        return self._result(self._divide(to_decimal(a), to_decimal(b), "divide"))

    def mod(self, a: Operand, b: Operand) -> str:
        dividend, divisor = to_decimal(a), to_decimal(b)
        if divisor.is_zero():
            raise DivisionByZeroError("Modulo by zero", operation="mod")
        with exact_context() as ctx:
            return self._result(ctx.remainder(dividend, divisor))

    def abs(self, value: Operand) -> str:
        return self._result(to_decimal(value).copy_abs())

    def ceil(self, value: Operand) -> str:
        return plain_string(round_decimal(to_decimal(value), 0, RoundingMode.POSITIVE_INFINITY))

    def floor(self, value: Operand) -> str:
        return plain_string(round_decimal(to_decimal(value), 0, RoundingMode.NEGATIVE_INFINITY))

    def round(
        self,
        value: Operand,
        precision: int = 0,
        mode: RoundingMode | None = None,
    ) -> str:
        return plain_string(round_decimal(to_decimal(value), precision, mode))

    def power(self, base: Operand, exponent: int | float) -> str:
        """Raise ``base`` to ``exponent``.

        Integer exponents of either sign are exact up to the final truncation.
        Fractional exponents are supported for positive bases only.

        Raises:
            DivisionByZeroError: If ``base`` is zero and ``exponent`` negative.
            UnsupportedOperationError: If ``base`` is negative and ``exponent``
                fractional.
        """
        number = to_decimal(base)
        power = to_decimal(exponent)

        if number.is_zero() and power < 0:
            raise DivisionByZeroError(
                "Zero cannot be raised to a negative power", operation="power"
            )

        integer, fraction = split_parts(power)
        if fraction.is_zero():
            n = int(integer)
            if n == 0:
                return self._result(Decimal(1))
            with exact_context() as ctx:
                raised = ctx.power(number, abs(n))
            if n < 0:
                raised = self._divide(Decimal(1), raised, "power")
            return self._result(raised)

        if number < 0:
            raise UnsupportedOperationError(
                "Fractional exponent of a negative base has no real result",
                operation="power",
            )
        if number.is_zero():
            return self._result(number)

        # |log10(base**exponent)| is bounded by |exponent| * (|adjusted| + 1).
        magnitude = math.ceil(abs(float(power)) * (abs(number.adjusted()) + 1)) + 1
        with bounded_context(self._digits_for(magnitude)) as ctx:
            return self._result(ctx.power(number, power))

    def sqrt(self, value: Operand) -> str:
        number = to_decimal(value)
        if number < 0:
            raise UnsupportedOperationError(
                "Cannot calculate square root of negative number", operation="sqrt"
            )
        with bounded_context(self._digits_for(number.adjusted() // 2 + 1)) as ctx:
            root = ctx.sqrt(number)
        with exact_context() as ctx:
            root = root.quantize(self.quantum, rounding=ROUND_DOWN, context=ctx)
            # Context.sqrt rounds half-even, which can land one quantum high.
            while ctx.multiply(root, root) > number:
                root = ctx.subtract(root, self.quantum)
        return self._result(root)

    def compare(self, a: Operand, b: Operand) -> int:
        left, right = to_decimal(a), to_decimal(b)
        return (left > right) - (left < right)

    def integer_part(self, value: Operand) -> int:
        return int(to_decimal(value))

    def fractional_part(self, value: Operand) -> str:
        _, fraction = split_parts(to_decimal(value))
        return self._result(fraction)

    def negate(self, value: Operand) -> str:
        return self._result(to_decimal(value).copy_negate())

    def min(self, a: Operand, b: Operand) -> str:
        left, right = to_decimal(a), to_decimal(b)
        return self._result(left if left <= right else right)

    def max(self, a: Operand, b: Operand) -> str:
        left, right = to_decimal(a), to_decimal(b)
        return self._result(left if left >= right else right)
