"""Numerus value façade.

An immutable wrapper around one finite Decimal. Every operation returns a new
instance; nothing is shared or mutated, so instances may be passed freely
between threads.

Arithmetic that has an exact decimal result (add, subtract, multiply, modulo,
integer powers) is exact. Division is rounded to ``DIVISION_PRECISION``
fractional digits, half away from zero. Square roots and fractional or
negative powers are delegated to the backend active in the current context.

    total = Numerus.sum(["19.99", "5.01"])      # Numerus('25.00')
    total.divide_by(3)                         # Numerus('8.3333333333')
    Numerus.create(100).clamp(0, 50)           # Numerus('50')
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal
from typing import Final

from numerus import percentage
from numerus.codec import exact_context, plain_string, split_parts, to_decimal
from numerus.context import current_backend
from numerus.errors import (
    DivisionByZeroError,
    EmptyInputError,
    InvalidRangeError,
    UnsupportedOperationError,
)
from numerus.localization import NumberLocalizer, PlainLocalizer
from numerus.rounding import RoundingMode, divide_rounded, round_decimal

logger = logging.getLogger(__name__)

DIVISION_PRECISION: Final[int] = 10
DIVISION_ROUNDING: Final[RoundingMode] = RoundingMode.HALF_AWAY_FROM_ZERO

DEFAULT_LOCALIZER: Final[NumberLocalizer] = PlainLocalizer()

Scalar = int | float | str | Decimal


def _coerce(value: Scalar | Numerus) -> Decimal:
    if isinstance(value, Numerus):
        return value.decimal
    return to_decimal(value)


def _coerce_or_none(value: object) -> Decimal | None:
    """Coerce an operator operand, or None when the type does not take part."""
    if isinstance(value, Numerus):
        return value.decimal
    if isinstance(value, bool) or not isinstance(value, int | float | Decimal):
        return None
    return to_decimal(value)


@dataclass(frozen=True, eq=False)
class Numerus:
    """Immutable arbitrary-precision number.

    Attributes:
        decimal: The wrapped finite Decimal.
    """

    decimal: Decimal

    def __post_init__(self) -> None:
        """Validate that the wrapped value is a finite Decimal."""
        if not isinstance(self.decimal, Decimal):
            raise TypeError(f"Numerus wraps a Decimal, got {type(self.decimal).__name__}")
        if not self.decimal.is_finite():
            raise UnsupportedOperationError(
                f"Numerus cannot hold non-finite value {self.decimal}", operation="create"
            )

    # Factories

    @classmethod
    def create(
        cls,
        value: Scalar | Numerus,
        locale: str | None = None,
        localizer: NumberLocalizer | None = None,
    ) -> Numerus:
        """Create a Numerus from a number or a (possibly locale-formatted) string.

        Args:
            value: int, float, Decimal, Numerus, or text parsed by the localizer.
            locale: Locale of ``value`` when it is text.
            localizer: Parser for text input (default: PlainLocalizer).

        Raises:
            NumberParseError: If text cannot be parsed.
            UnsupportedOperationError: If the value is NaN or infinite.
        """
        if isinstance(value, Numerus):
            return value
        if isinstance(value, str):
            return cls.parse_float(value, locale, localizer)
        return cls(to_decimal(value))

    @classmethod
    def parse_int(
        cls,
        text: str,
        locale: str | None = None,
        localizer: NumberLocalizer | None = None,
    ) -> Numerus:
        """Parse text and keep its integer part (truncated toward zero)."""
        canonical = (localizer or DEFAULT_LOCALIZER).parse(text, locale)
        return cls(Decimal(canonical).to_integral_value(rounding=ROUND_DOWN))

    @classmethod
    def parse_float(
        cls,
        text: str,
        locale: str | None = None,
        localizer: NumberLocalizer | None = None,
    ) -> Numerus:
        """Parse text into a Numerus keeping every fractional digit."""
        canonical = (localizer or DEFAULT_LOCALIZER).parse(text, locale)
        return cls(Decimal(canonical))

    @classmethod
    def sum(cls, values: Iterable[Scalar | Numerus]) -> Numerus:
        """Sum values exactly. The sum of no values is zero."""
        total = Decimal(0)
        with exact_context() as ctx:
            for value in values:
                total = ctx.add(total, _coerce(value))
        return cls(total)

    @classmethod
    def average(cls, values: Iterable[Scalar | Numerus]) -> Numerus:
        """Return the arithmetic mean, divided at ``DIVISION_PRECISION`` digits.

        Raises:
            EmptyInputError: If ``values`` is empty.
        """
        items = list(values)
        if not items:
            raise EmptyInputError(operation="average")
        total = cls.sum(items).decimal
        return cls(
            divide_rounded(
                total,
                Decimal(len(items)),
                DIVISION_PRECISION,
                DIVISION_ROUNDING,
                operation="average",
            )
        )

    # Arithmetic

    def plus(self, addend: Scalar | Numerus) -> Numerus:
        with exact_context() as ctx:
            return Numerus(ctx.add(self.decimal, _coerce(addend)))

    def minus(self, subtrahend: Scalar | Numerus) -> Numerus:
        with exact_context() as ctx:
            return Numerus(ctx.subtract(self.decimal, _coerce(subtrahend)))

    def multiply_by(self, multiplier: Scalar | Numerus) -> Numerus:
        with exact_context() as ctx:
            return Numerus(ctx.multiply(self.decimal, _coerce(multiplier)))

    def divide_by(self, divisor: Scalar | Numerus) -> Numerus:
        """Divide, rounding to ``DIVISION_PRECISION`` digits half away from zero.

        Raises:
            DivisionByZeroError: If ``divisor`` is zero.
        """
        return Numerus(
            divide_rounded(
                self.decimal,
                _coerce(divisor),
                DIVISION_PRECISION,
                DIVISION_ROUNDING,
                operation="divide",
            )
        )

    def mod(self, divisor: Scalar | Numerus) -> Numerus:
        """Remainder of truncated division; carries the sign of this value.

        Raises:
            DivisionByZeroError: If ``divisor`` is zero.
        """
        value = _coerce(divisor)
        if value.is_zero():
            raise DivisionByZeroError("Modulo by zero", operation="mod")
        with exact_context() as ctx:
            return Numerus(ctx.remainder(self.decimal, value))

    def abs(self) -> Numerus:
        return Numerus(self.decimal.copy_abs())

    def negate(self) -> Numerus:
        if self.decimal.is_zero():
            return self
        return Numerus(self.decimal.copy_negate())

    def power(self, exponent: int | float) -> Numerus:
        """Raise to ``exponent``.

        Non-negative integer exponents are computed exactly. Other exponents
        are delegated to the active backend and carry its precision.

        Raises:
            DivisionByZeroError: If this value is zero and ``exponent`` negative.
            UnsupportedOperationError: If the active backend cannot raise to
                ``exponent``.
        """
        if isinstance(exponent, int) and not isinstance(exponent, bool) and exponent >= 0:
            if exponent == 0:
                return Numerus(Decimal(1))
            with exact_context() as ctx:
                return Numerus(ctx.power(self.decimal, exponent))

        backend = current_backend()
        logger.debug("Delegating power(%s) to %s backend", exponent, backend.kind.value)
        return Numerus(to_decimal(backend.power(self.decimal, exponent)))

    def sqrt(self) -> Numerus:
        """Square root computed by the active backend.

        Raises:
            UnsupportedOperationError: If this value is negative.
        """
        if self.decimal < 0:
            raise UnsupportedOperationError(
                "Cannot calculate square root of negative number", operation="sqrt"
            )
        backend = current_backend()
        logger.debug("Delegating sqrt to %s backend", backend.kind.value)
        return Numerus(to_decimal(backend.sqrt(self.decimal)))

    # Rounding

    def ceil(self) -> Numerus:
        return self.round(0, RoundingMode.POSITIVE_INFINITY)

    def floor(self) -> Numerus:
        return self.round(0, RoundingMode.NEGATIVE_INFINITY)

    def round(self, precision: int = 0, mode: RoundingMode | None = None) -> Numerus:
        """Round to ``precision`` fractional digits (default: half away from zero)."""
        return Numerus(round_decimal(self.decimal, precision, mode))

    def round_away_from_zero(self, precision: int = 0) -> Numerus:
        return self.round(precision, RoundingMode.AWAY_FROM_ZERO)

    def round_towards_zero(self, precision: int = 0) -> Numerus:
        return self.round(precision, RoundingMode.TOWARDS_ZERO)

    def round_positive_infinity(self, precision: int = 0) -> Numerus:
        return self.round(precision, RoundingMode.POSITIVE_INFINITY)

    def round_negative_infinity(self, precision: int = 0) -> Numerus:
        return self.round(precision, RoundingMode.NEGATIVE_INFINITY)

    def round_half_away_from_zero(self, precision: int = 0) -> Numerus:
        return self.round(precision, RoundingMode.HALF_AWAY_FROM_ZERO)

    def round_half_towards_zero(self, precision: int = 0) -> Numerus:
        return self.round(precision, RoundingMode.HALF_TOWARDS_ZERO)

    def round_half_even(self, precision: int = 0) -> Numerus:
        return self.round(precision, RoundingMode.HALF_EVEN)

    def round_half_odd(self, precision: int = 0) -> Numerus:
        return self.round(precision, RoundingMode.HALF_ODD)

    # Parts

    def integer_part(self) -> int:
        """Integer part, truncated toward zero (``-12.99`` -> ``-12``)."""
        return int(self.decimal)

    def fractional_part(self) -> Decimal:
        """Absolute fractional part, in ``[0, 1)`` (``-12.34`` -> ``0.34``)."""
        _, fraction = split_parts(self.decimal)
        return fraction

    # Predicates

    def is_positive(self) -> bool:
        return self.decimal > 0

    def is_negative(self) -> bool:
        return self.decimal < 0

    def is_zero(self) -> bool:
        return self.decimal.is_zero()

    def is_integer(self) -> bool:
        return self.fractional_part().is_zero()

    def is_float(self) -> bool:
        return not self.is_integer()

    def is_even(self) -> bool:
        """True for integral values divisible by two; False for any fraction."""
        if not self.is_integer():
            return False
        with exact_context() as ctx:
            return ctx.remainder(self.decimal, 2).is_zero()

    def is_odd(self) -> bool:
        return self.is_integer() and not self.is_even()

    def sign(self) -> int:
        return (self.decimal > 0) - (self.decimal < 0)

    # Comparison

    def compare(self, other: Scalar | Numerus) -> int:
        """Return 1, 0 or -1 as this value is greater than, equal to or less than ``other``."""
        value = _coerce(other)
        return (self.decimal > value) - (self.decimal < value)

    def equals(self, other: Scalar | Numerus) -> bool:
        return self.compare(other) == 0

    def not_equals(self, other: Scalar | Numerus) -> bool:
        return not self.equals(other)

    def greater_than(self, other: Scalar | Numerus) -> bool:
        return self.compare(other) > 0

    def greater_than_or_equal(self, other: Scalar | Numerus) -> bool:
        return self.compare(other) >= 0

    def less_than(self, other: Scalar | Numerus) -> bool:
        return self.compare(other) < 0

    def less_than_or_equal(self, other: Scalar | Numerus) -> bool:
        return self.compare(other) <= 0

    def between(
        self,
        lower: Scalar | Numerus,
        upper: Scalar | Numerus,
        inclusive: bool = True,
    ) -> bool:
        """Check ``lower <= self <= upper`` (strict bounds when not inclusive)."""
        if inclusive:
            return self.compare(lower) >= 0 and self.compare(upper) <= 0
        return self.compare(lower) > 0 and self.compare(upper) < 0

    def not_between(
        self,
        lower: Scalar | Numerus,
        upper: Scalar | Numerus,
        inclusive: bool = True,
    ) -> bool:
        return not self.between(lower, upper, inclusive)

    def min(self, other: Scalar | Numerus) -> Numerus:
        value = _coerce(other)
        return self if self.decimal <= value else Numerus(value)

    def max(self, other: Scalar | Numerus) -> Numerus:
        value = _coerce(other)
        return self if self.decimal >= value else Numerus(value)

    def clamp(self, lower: Scalar | Numerus, upper: Scalar | Numerus) -> Numerus:
        """Limit this value to ``[lower, upper]``.

        Raises:
            InvalidRangeError: If ``lower > upper``.
        """
        low, high = _coerce(lower), _coerce(upper)
        if low > high:
            raise InvalidRangeError(plain_string(low), plain_string(high), operation="clamp")
        return self.max(low).min(high)

    # Percentages

    def percent_of(self, total: Scalar | Numerus) -> Decimal:
        """Percentage this value represents of ``total``.

        Raises:
            DivisionByZeroError: If ``total`` is zero.
        """
        return percentage.percentage_of(self.decimal, _coerce(total))

    def add_percent(self, percent: Scalar) -> Numerus:
        return Numerus(percentage.add(percent, self.decimal))

    def subtract_percent(self, percent: Scalar) -> Numerus:
        return Numerus(percentage.subtract(percent, self.decimal))

    def percentage_change(self, new_value: Scalar | Numerus) -> Decimal:
        """Relative change from this value to ``new_value``, as a percentage.

        Raises:
            DivisionByZeroError: If this value is zero.
        """
        return percentage.difference_between(self.decimal, _coerce(new_value))

    # Integer functions

    def gcd(self, other: Scalar | Numerus) -> Numerus:
        """Greatest common divisor of the truncated, absolute integer values."""
        return Numerus(Decimal(math.gcd(abs(self.integer_part()), abs(int(_coerce(other))))))

    def lcm(self, other: Scalar | Numerus) -> Numerus:
        """Least common multiple of the truncated, absolute integer values.

        Raises:
            UnsupportedOperationError: If either integer value is zero.
        """
        a, b = abs(self.integer_part()), abs(int(_coerce(other)))
        if a == 0 or b == 0:
            raise UnsupportedOperationError("Cannot calculate LCM with zero", operation="lcm")
        return Numerus(Decimal(math.lcm(a, b)))

    def factorial(self) -> Numerus:
        """Factorial of a non-negative integral value.

        Raises:
            UnsupportedOperationError: If the value is negative or has a fraction.
        """
        if self.is_negative():
            raise UnsupportedOperationError(
                "Cannot calculate factorial of negative number", operation="factorial"
            )
        if not self.is_integer():
            raise UnsupportedOperationError(
                "Factorial requires an integer value", operation="factorial"
            )

        result = 1
        for factor in range(2, self.integer_part() + 1):
            result *= factor
        return Numerus(Decimal(result))

    # Conversion

    def value(self) -> int | float:
        """Native value: int when integral, otherwise float."""
        if self.is_integer():
            return self.integer_part()
        return float(self.decimal)

    def to_int(self) -> int:
        return self.integer_part()

    def to_float(self) -> float:
        return float(self.decimal)

    def to_decimal(self) -> Decimal:
        return self.decimal

    def to_string(self) -> str:
        return plain_string(self.decimal)

    def trim(self) -> Numerus:
        """Drop trailing fractional zeros (``1.500`` -> ``1.5``)."""
        with exact_context() as ctx:
            if self.is_integer():
                return Numerus(self.decimal.quantize(Decimal(1), context=ctx))
            return Numerus(self.decimal.normalize(ctx))

    def format(
        self,
        precision: int = 0,
        locale: str | None = None,
        localizer: NumberLocalizer | None = None,
    ) -> str:
        """Render through the localizer with ``precision`` fractional digits."""
        return (localizer or DEFAULT_LOCALIZER).format(self.decimal, precision, locale)

    # Python protocols

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Numerus('{self.to_string()}')"

    def __int__(self) -> int:
        return self.to_int()

    def __float__(self) -> float:
        return self.to_float()

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __hash__(self) -> int:
        return hash(self.decimal)

    def __eq__(self, other: object) -> bool:
        value = _coerce_or_none(other)
        if value is None:
            return NotImplemented
        return self.decimal == value

    def __lt__(self, other: object) -> bool:
        value = _coerce_or_none(other)
        if value is None:
            return NotImplemented
        return self.decimal < value

    def __le__(self, other: object) -> bool:
        value = _coerce_or_none(other)
        if value is None:
            return NotImplemented
        return self.decimal <= value

    def __gt__(self, other: object) -> bool:
        value = _coerce_or_none(other)
        if value is None:
            return NotImplemented
        return self.decimal > value

    def __ge__(self, other: object) -> bool:
        value = _coerce_or_none(other)
        if value is None:
            return NotImplemented
        return self.decimal >= value

    def __neg__(self) -> Numerus:
        return self.negate()

    def __abs__(self) -> Numerus:
        return self.abs()

    def __add__(self, other: object) -> Numerus:
        value = _coerce_or_none(other)
        if value is None:
            return NotImplemented
        return self.plus(value)

    __radd__ = __add__

    def __sub__(self, other: object) -> Numerus:
        value = _coerce_or_none(other)
        if value is None:
            return NotImplemented
        return self.minus(value)

    def __rsub__(self, other: object) -> Numerus:
        value = _coerce_or_none(other)
        if value is None:
            return NotImplemented
        return Numerus(value).minus(self)

    def __mul__(self, other: object) -> Numerus:
        value = _coerce_or_none(other)
        if value is None:
            return NotImplemented
        return self.multiply_by(value)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Numerus:
        value = _coerce_or_none(other)
        if value is None:
            return NotImplemented
        return self.divide_by(value)

    def __rtruediv__(self, other: object) -> Numerus:
        value = _coerce_or_none(other)
        if value is None:
            return NotImplemented
        return Numerus(value).divide_by(self)

    def __mod__(self, other: object) -> Numerus:
        value = _coerce_or_none(other)
        if value is None:
            return NotImplemented
        return self.mod(value)
