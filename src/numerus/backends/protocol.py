"""Backend protocol - the operation contract every numeric backend implements.

Defines the closed set of backend kinds and the ``MathBackend`` protocol shared
by the native, fixed-point and string-decimal backends.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import StrEnum
from typing import Final, Protocol

from numerus.rounding import RoundingMode

logger = logging.getLogger(__name__)

DEFAULT_SCALE: Final[int] = 10

Operand = int | float | str | Decimal
Number = int | float | str

# Names accepted in configuration besides the canonical values.
_ALIASES: Final[dict[str, str]] = {
    "float": "native",
    "fixed": "fixed-point",
    "fixedpoint": "fixed-point",
    "gmp": "fixed-point",
    "decimal": "string-decimal",
    "stringdecimal": "string-decimal",
    "bcmath": "string-decimal",
}


class BackendKind(StrEnum):
    """Backend selector values."""

    AUTO = "auto"
    NATIVE = "native"
    FIXED_POINT = "fixed-point"
    STRING_DECIMAL = "string-decimal"

    @classmethod
    def parse(cls, value: str | BackendKind | None) -> BackendKind:
        """Parse a selector string, falling back to AUTO when unrecognised.

        Args:
            value: Selector such as "fixed-point", "FIXED_POINT" or "gmp".

        Returns:
            The matching BackendKind, or AUTO (with a warning) for unknown input.
        """
        if isinstance(value, BackendKind):
            return value
        if value is None or not value.strip():
            return cls.AUTO

        key = value.strip().lower().replace("_", "-")
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            logger.warning(
                "Unrecognised backend selector '%s'; falling back to '%s'",
                value,
                cls.AUTO.value,
            )
            return cls.AUTO


class MathBackend(Protocol):
    """Protocol defining the operations all backends must implement.

    Operands may be ints, floats, decimal strings or Decimals. Fixed-point and
    string-decimal backends return decimal strings; the native backend returns
    Python numbers.
    """

    @property
    def kind(self) -> BackendKind:
        """Backend identity."""
        ...

    @property
    def scale(self) -> int | None:
        """Fractional digits retained, or None for the scale-less native backend."""
        ...

    def add(self, a: Operand, b: Operand) -> Number:
        """Return ``a + b``."""
        ...

    def subtract(self, a: Operand, b: Operand) -> Number:
        """Return ``a - b``."""
        ...

    def multiply(self, a: Operand, b: Operand) -> Number:
        """Return ``a * b``."""
        ...

    def divide(self, a: Operand, b: Operand) -> Number:
        """Return ``a / b``.

        Raises:
            DivisionByZeroError: If ``b`` is zero.
        """
        ...

    def mod(self, a: Operand, b: Operand) -> Number:
        """Return the remainder of ``a / b`` with the sign of ``a``.

        Raises:
            DivisionByZeroError: If ``b`` is zero.
        """
        ...

    def abs(self, value: Operand) -> Number:
        """Return the absolute value."""
        ...

    def ceil(self, value: Operand) -> Number:
        """Round up to the nearest integer."""
        ...

    def floor(self, value: Operand) -> Number:
        """Round down to the nearest integer."""
        ...

    def round(
        self,
        value: Operand,
        precision: int = 0,
        mode: RoundingMode | None = None,
    ) -> float | str:
        """Round to ``precision`` fractional digits (default mode HALF_AWAY_FROM_ZERO)."""
        ...

    def power(self, base: Operand, exponent: int | float) -> Number:
        """Raise ``base`` to ``exponent``."""
        ...

    def sqrt(self, value: Operand) -> Number:
        """Return the square root.

        Raises:
            UnsupportedOperationError: If the value is negative.
        """
        ...

    def compare(self, a: Operand, b: Operand) -> int:
        """Return 1 if ``a > b``, -1 if ``a < b``, 0 if equal."""
        ...

    def integer_part(self, value: Operand) -> int:
        """Return the integer part, truncated toward zero."""
        ...

    def fractional_part(self, value: Operand) -> Number:
        """Return the absolute fractional part, in ``[0, 1)``."""
        ...

    def negate(self, value: Operand) -> Number:
        """Return ``-value``."""
        ...

    def min(self, a: Operand, b: Operand) -> Number:
        """Return the smaller operand."""
        ...

    def max(self, a: Operand, b: Operand) -> Number:
        """Return the larger operand."""
        ...
