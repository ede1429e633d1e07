"""Scaled-decimal codec.

Converts between plain decimal strings and fixed-point scaled integers:

    encode("-12.345", 4) -> -123450
    decode(-123450, 4)   -> "-12.345"

Encoding truncates fractional digits beyond ``scale``. This is a precision
boundary, not rounding: ``encode("0.129", 2)`` is ``12``. It is the one
documented place where the engine drops information; every other lossy step
is an explicit rounding call.

The module also owns operand canonicalisation (int, float, str and Decimal to a
plain decimal string) and the integer/fraction split used by the rounding
engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_DOWN,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import TYPE_CHECKING, Final

from numerus.errors import NumberParseError, UnsupportedOperationError

if TYPE_CHECKING:
    from contextlib import AbstractContextManager

Operand = int | float | str | Decimal

# Arithmetic in this context never rounds: precision and exponent limits are
# the library maxima, so add/subtract/multiply/quantize/scaleb are exact.
_EXACT_CONTEXT: Final[Context] = Context(
    prec=MAX_PREC,
    rounding=ROUND_DOWN,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


def exact_context() -> AbstractContextManager[Context]:
    """Return a thread-local copy of the exact arithmetic context."""
    return localcontext(_EXACT_CONTEXT)


def bounded_context(digits: int) -> AbstractContextManager[Context]:
    """Return a local context truncating to ``digits`` significant digits.

    Used for operations without a finite exact result (division, roots,
    fractional powers); callers size ``digits`` to cover every fractional
    place they keep.
    """
    return localcontext(_EXACT_CONTEXT, prec=max(digits, 1))


def _check_scale(scale: int) -> None:
    if isinstance(scale, bool) or not isinstance(scale, int) or scale < 0:
        raise ValueError(f"scale must be a non-negative integer, got {scale!r}")


def plain_string(value: Decimal) -> str:
    """Render a finite Decimal without exponent and without negative zero."""
    if value.is_zero():
        value = value.copy_abs()
    return format(value, "f")


def to_decimal_string(value: Operand) -> str:
    """Canonicalise an operand into a plain decimal string.

    Floats are converted through their shortest ``repr`` so that ``0.1``
    becomes ``"0.1"`` rather than its binary expansion. Exponent notation is
    expanded (``"1e-7"`` -> ``"0.0000001"``).

    Args:
        value: Integer, float, decimal string or Decimal.

    Returns:
        Plain decimal string (optional ``-``, digits, optional fraction).

    Raises:
        UnsupportedOperationError: If the value is NaN or infinite.
        NumberParseError: If a string is not a decimal number.
        TypeError: If the value is not a supported operand type.
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric operand")
    if isinstance(value, int):
        return plain_string(Decimal(value))
    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnsupportedOperationError(
                f"Non-finite float {value!r} has no decimal representation",
                operation="encode",
            )
        return plain_string(Decimal(repr(value)))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise UnsupportedOperationError(
                f"Non-finite decimal {value} has no decimal representation",
                operation="encode",
            )
        return plain_string(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            parsed = Decimal(text)
        except InvalidOperation as e:
            raise NumberParseError(value) from e
        if not parsed.is_finite():
            raise NumberParseError(value)
        return plain_string(parsed)
    raise TypeError(f"Unsupported operand type: {type(value).__name__}")


def to_decimal(value: Operand) -> Decimal:
    """Convert an operand to a finite Decimal via its canonical string."""
    if isinstance(value, Decimal) and value.is_finite():
        return value
    return Decimal(to_decimal_string(value))


def encode(value: Operand, scale: int) -> int:
    """Encode a decimal value as an integer scaled by ``10**scale``.

    Fractional digits beyond ``scale`` are truncated toward zero. The
    conversion goes through Decimal rather than ``int(str)``, so magnitudes
    are not bound by the interpreter's int/str digit limit.

    Args:
        value: Decimal string (or any operand accepted by to_decimal_string).
        scale: Number of fractional digits to retain.

    Returns:
        The unscaled integer, carrying the sign of the input.
    """
    _check_scale(scale)
    with exact_context() as ctx:
        return int(ctx.scaleb(to_decimal(value), scale))


def decode(unscaled: int, scale: int) -> str:
    """Decode a scaled integer back into a plain decimal string.

    Trailing fractional zeros are stripped; an all-zero fraction yields an
    integer-only string. Zero never carries a sign.

    Examples:
        >>> decode(-123450, 4)
        '-12.345'
        >>> decode(5, 3)
        '0.005'
        >>> decode(0, 2)
        '0'
    """
    _check_scale(scale)
    with exact_context() as ctx:
        value = ctx.normalize(ctx.scaleb(Decimal(unscaled), -scale))
    return plain_string(value)


def split_parts(value: Decimal) -> tuple[Decimal, Decimal]:
    """Split a value into its integer part and absolute fractional part.

    The integer part is truncated toward zero; the fractional part lies in
    ``[0, 1)`` regardless of the sign of ``value``.
    """
    with exact_context() as ctx:
        integer = value.to_integral_value(rounding=ROUND_DOWN, context=ctx)
        fraction = ctx.subtract(value.copy_abs(), integer.copy_abs())
    return integer, fraction


@dataclass(frozen=True, eq=False)
class DecimalValue:
    """A decimal as sign, unscaled magnitude and scale.

    The represented magnitude is ``sign * unscaled / 10**scale``. Equality and
    hashing compare magnitudes, so ``1.50`` (scale 2) equals ``1.5`` (scale 1).

    Attributes:
        sign: -1, 0 or 1. Zero iff ``unscaled`` is zero.
        unscaled: Non-negative integer magnitude.
        scale: Non-negative count of fractional digits.
    """

    sign: int
    unscaled: int
    scale: int

    def __post_init__(self) -> None:
        """Validate the sign/magnitude/scale invariants."""
        _check_scale(self.scale)
        if self.sign not in (-1, 0, 1):
            raise ValueError(f"sign must be -1, 0 or 1, got {self.sign}")
        if self.unscaled < 0:
            raise ValueError(f"unscaled magnitude must be non-negative, got {self.unscaled}")
        if (self.sign == 0) != (self.unscaled == 0):
            raise ValueError("sign must be 0 exactly when the magnitude is 0")

    @classmethod
    def from_unscaled(cls, unscaled: int, scale: int) -> DecimalValue:
        """Build from a signed scaled integer."""
        sign = (unscaled > 0) - (unscaled < 0)
        return cls(sign=sign, unscaled=abs(unscaled), scale=scale)

    @classmethod
    def from_string(cls, value: Operand, scale: int | None = None) -> DecimalValue:
        """Build from a decimal operand.

        When ``scale`` is omitted the value keeps all of its fractional digits.
        """
        if scale is None:
            _, _, fraction = to_decimal_string(value).partition(".")
            scale = len(fraction)
        return cls.from_unscaled(encode(value, scale), scale)

    @property
    def signed_unscaled(self) -> int:
        """The unscaled integer with the sign applied."""
        return self.sign * self.unscaled

    def rescale(self, scale: int) -> DecimalValue:
        """Return the value at another scale (truncating extra digits)."""
        return DecimalValue.from_string(self.to_string(), scale)

    def to_string(self) -> str:
        """Render as a plain decimal string with trailing zeros stripped."""
        return decode(self.signed_unscaled, self.scale)

    def to_decimal(self) -> Decimal:
        """Render as an exact Decimal at this value's scale."""
        with exact_context() as ctx:
            return ctx.scaleb(Decimal(self.signed_unscaled), -self.scale)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecimalValue):
            return NotImplemented
        scale = max(self.scale, other.scale)
        return self.signed_unscaled * 10 ** (scale - self.scale) == (
            other.signed_unscaled * 10 ** (scale - other.scale)
        )

    def __hash__(self) -> int:
        return hash(self.to_decimal())

    def __str__(self) -> str:
        return self.to_string()
