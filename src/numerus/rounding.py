"""Rounding-mode engine.

Applies one of eight tie-break policies to a Decimal at an arbitrary number of
fractional digits. Every comparison against one half is performed on the exact
Decimal fraction, never on a binary float, so ties such as ``2.675`` at two
places are classified correctly.

The algorithm is described at precision 0 and generalised by scaling:

1. scale the value by ``10**precision`` (exact),
2. split into an integer part (toward zero) and an absolute fraction,
3. keep the integer part or step it one unit away from zero, per mode,
4. scale back by ``10**-precision`` (exact, no re-rounding).
"""

from __future__ import annotations

from decimal import Decimal, Inexact
from enum import StrEnum
from typing import Final, assert_never

from numerus.codec import bounded_context, exact_context, split_parts
from numerus.errors import DivisionByZeroError

HALF: Final[Decimal] = Decimal("0.5")
ZERO: Final[Decimal] = Decimal(0)


class RoundingMode(StrEnum):
    """Closed set of rounding policies."""

    AWAY_FROM_ZERO = "away-from-zero"
    TOWARDS_ZERO = "towards-zero"
    POSITIVE_INFINITY = "positive-infinity"
    NEGATIVE_INFINITY = "negative-infinity"
    HALF_AWAY_FROM_ZERO = "half-away-from-zero"
    HALF_TOWARDS_ZERO = "half-towards-zero"
    HALF_EVEN = "half-even"
    HALF_ODD = "half-odd"

    @classmethod
    def parse(cls, text: str) -> RoundingMode:
        """Parse a mode from its value (``half-even``) or name (``HALF_EVEN``, ``HalfEven``).

        Raises:
            ValueError: If the text names no rounding mode.
        """
        key = "".join(ch for ch in text.strip().lower() if ch.isalnum())
        for mode in cls:
            if key == mode.value.replace("-", ""):
                return mode
        valid = [mode.value for mode in cls]
        raise ValueError(f"Unknown rounding mode: '{text}'. Valid options: {valid}")


DEFAULT_ROUNDING_MODE: Final[RoundingMode] = RoundingMode.HALF_AWAY_FROM_ZERO


def _is_odd(integer: Decimal) -> bool:
    with exact_context() as ctx:
        return not ctx.remainder(integer, 2).is_zero()


def round_to_integer(value: Decimal, mode: RoundingMode) -> Decimal:
    """Round a Decimal to a whole number using the given policy.

    Args:
        value: Any finite Decimal.
        mode: Tie-break policy.

    Returns:
        An integral Decimal (exponent 0).
    """
    integer, fraction = split_parts(value)
    step = Decimal(1) if value >= ZERO else Decimal(-1)

    match mode:
        case RoundingMode.TOWARDS_ZERO:
            should_step = False
        case RoundingMode.AWAY_FROM_ZERO:
            should_step = fraction > ZERO
        case RoundingMode.POSITIVE_INFINITY:
            should_step = fraction > ZERO and value > ZERO
        case RoundingMode.NEGATIVE_INFINITY:
            should_step = fraction > ZERO and value < ZERO
        case RoundingMode.HALF_AWAY_FROM_ZERO:
            should_step = fraction >= HALF
        case RoundingMode.HALF_TOWARDS_ZERO:
            should_step = fraction > HALF
        case RoundingMode.HALF_EVEN:
            should_step = fraction > HALF or (fraction == HALF and _is_odd(integer))
        case RoundingMode.HALF_ODD:
            should_step = fraction > HALF or (fraction == HALF and not _is_odd(integer))
        case _:
            assert_never(mode)

    if not should_step:
        return integer.copy_abs() if integer.is_zero() else integer
    with exact_context() as ctx:
        return ctx.add(integer, step)


def round_decimal(
    value: Decimal,
    precision: int = 0,
    mode: RoundingMode | None = None,
) -> Decimal:
    """Round a Decimal to ``precision`` fractional digits.

    Args:
        value: Any finite Decimal.
        precision: Fractional digits to keep. Negative values round to tens,
            hundreds, ... and yield a result without fractional digits.
        mode: Tie-break policy (default: HALF_AWAY_FROM_ZERO).

    Returns:
        Decimal with exactly ``max(precision, 0)`` fractional digits.

    Examples:
        >>> round_decimal(Decimal("2.5"), 0, RoundingMode.HALF_EVEN)
        Decimal('2')
        >>> round_decimal(Decimal("-1.005"), 2)
        Decimal('-1.01')
    """
    mode = mode or DEFAULT_ROUNDING_MODE

    with exact_context() as ctx:
        shifted = value.scaleb(precision, context=ctx)
        rounded = round_to_integer(shifted, mode)
        result = rounded.scaleb(-precision, context=ctx)
        result = result.quantize(Decimal(1).scaleb(-max(precision, 0)), context=ctx)

    return result.copy_abs() if result.is_zero() else result


def round_float(
    value: float,
    precision: int = 0,
    mode: RoundingMode | None = None,
) -> float:
    """Round a float through its shortest decimal ``repr``.

    ``round_float(2.675, 2)`` is ``2.68`` because the float is treated as the
    decimal it prints as, not as its binary expansion.
    """
    return float(round_decimal(Decimal(repr(float(value))), precision, mode))


def divide_rounded(
    dividend: Decimal,
    divisor: Decimal,
    precision: int,
    mode: RoundingMode | None = None,
    *,
    operation: str = "divide",
) -> Decimal:
    """Divide and round the quotient to ``precision`` fractional digits.

    The quotient is truncated a few digits past ``precision``. When digits were
    discarded a sticky digit is appended below the kept ones, so a truncated
    quotient is never mistaken for an exact tie.

    Raises:
        DivisionByZeroError: If ``divisor`` is zero.
    """
    if divisor.is_zero():
        raise DivisionByZeroError(operation=operation)

    magnitude = max(dividend.adjusted() - divisor.adjusted() + 1, 0)
    with bounded_context(magnitude + max(precision, 0) + 2) as ctx:
        quotient = ctx.divide(dividend, divisor)
        inexact = bool(ctx.flags[Inexact])

    if inexact:
        sign, _, exponent = quotient.as_tuple()
        with exact_context() as ctx:
            quotient = ctx.add(quotient, Decimal((sign, (1,), int(exponent) - 1)))
    return round_decimal(quotient, precision, mode)
