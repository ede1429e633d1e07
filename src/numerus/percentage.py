"""Percentage helpers.

Closed-form compositions of multiply, divide and subtract over Decimal:

    percentage_of(25, 200)      -> Decimal('12.50000000')
    difference_between(100, 80) -> Decimal('-20.00000000')
    add(20, 100)                -> Decimal('120.00')

Ratios are divided at ``RATIO_PRECISION`` fractional digits, half away from
zero, before scaling to a percentage. Scaling by one hundred is an exact
decimal shift.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Final

from numerus.codec import Operand, exact_context, to_decimal
from numerus.errors import DivisionByZeroError
from numerus.rounding import RoundingMode, divide_rounded

RATIO_PRECISION: Final[int] = 10
RATIO_ROUNDING: Final[RoundingMode] = RoundingMode.HALF_AWAY_FROM_ZERO


def _percent(numerator: Decimal, denominator: Decimal, operation: str) -> Decimal:
    ratio = divide_rounded(
        numerator, denominator, RATIO_PRECISION, RATIO_ROUNDING, operation=operation
    )
    with exact_context() as ctx:
        return ratio.scaleb(2, context=ctx)


def percentage_of(part: Operand, total: Operand) -> Decimal:
    """Return the percentage ``part`` represents of ``total``.

    Raises:
        DivisionByZeroError: If ``total`` is zero.
    """
    denominator = to_decimal(total)
    if denominator.is_zero():
        raise DivisionByZeroError("Cannot calculate percentage of zero", operation="percentage_of")
    return _percent(to_decimal(part), denominator, "percentage_of")


def difference_between(original: Operand, new: Operand) -> Decimal:
    """Return the relative change from ``original`` to ``new`` as a percentage.

    Positive for increases, negative for decreases.

    Raises:
        DivisionByZeroError: If ``original`` is zero.
    """
    base = to_decimal(original)
    if base.is_zero():
        raise DivisionByZeroError(
            "Cannot calculate percentage change from zero", operation="percentage_change"
        )
    with exact_context() as ctx:
        change = ctx.subtract(to_decimal(new), base)
    return _percent(change, base, "percentage_change")


def absolute_difference_between(a: Operand, b: Operand) -> Decimal:
    """Return the magnitude of the relative change from ``a`` to ``b``."""
    return difference_between(a, b).copy_abs()


def calculate(percentage: Operand, number: Operand) -> Decimal:
    """Return ``percentage`` percent of ``number``."""
    with exact_context() as ctx:
        return ctx.multiply(to_decimal(number), to_decimal(percentage).scaleb(-2, context=ctx))


def add(percentage: Operand, number: Operand) -> Decimal:
    """Increase ``number`` by ``percentage`` percent of itself."""
    base = to_decimal(number)
    with exact_context() as ctx:
        return ctx.add(base, calculate(percentage, base))


def subtract(percentage: Operand, number: Operand) -> Decimal:
    """Decrease ``number`` by ``percentage`` percent of itself."""
    base = to_decimal(number)
    with exact_context() as ctx:
        return ctx.subtract(base, calculate(percentage, base))
