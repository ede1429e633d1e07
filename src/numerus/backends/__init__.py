"""Numerus numeric backends.

This package provides:
- MathBackend: The operation contract shared by every backend
- NativeBackend, FixedPointBackend, StringDecimalBackend: The closed backend family
- create_backend: Selector with capability-probed automatic fallback
"""

from numerus.backends.fixed_point import FixedPointBackend
from numerus.backends.native import NativeBackend
from numerus.backends.protocol import DEFAULT_SCALE, BackendKind, MathBackend
from numerus.backends.selector import (
    AUTO_PREFERENCE,
    Backend,
    available_backends,
    create_backend,
    create_backend_from_config,
)
from numerus.backends.string_decimal import StringDecimalBackend

__all__ = [
    "AUTO_PREFERENCE",
    "DEFAULT_SCALE",
    "Backend",
    "BackendKind",
    "FixedPointBackend",
    "MathBackend",
    "NativeBackend",
    "StringDecimalBackend",
    "available_backends",
    "create_backend",
    "create_backend_from_config",
]
