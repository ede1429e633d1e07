"""Runtime capability probes for the arbitrary-precision backends.

Backends call these probes at construction time and raise
``CapabilityUnavailableError`` when the runtime cannot support the requested
scale. Tests monkeypatch the probes to simulate constrained runtimes.
"""

from __future__ import annotations

import decimal
import importlib.util

ARBITRARY_PRECISION_INTEGERS = "arbitrary-precision integers"
DECIMAL_ARITHMETIC = "decimal arithmetic"


def max_integer_digits() -> int:
    """Return the most decimal digits the scaled-decimal codec can carry."""
    return decimal.MAX_PREC


def has_arbitrary_precision_integers(digits: int = 1) -> bool:
    """Check that integers of ``digits`` decimal digits survive the codec.

    Fixed-point values are encoded and decoded through Decimal on every
    operation, so the usable scale is bounded by the decimal precision limit
    rather than the interpreter's int/str conversion limit.
    """
    return digits <= max_integer_digits()


def has_decimal_arithmetic(digits: int = 1) -> bool:
    """Check that the decimal module is importable and supports ``digits`` digits."""
    if importlib.util.find_spec("decimal") is None:
        return False
    return digits <= decimal.MAX_PREC
