"""Numerus - pluggable arbitrary-precision decimal engine.

This package provides:
- Numerus: Immutable arbitrary-precision value façade
- RoundingMode: Eight tie-break policies applied uniformly by every backend
- create_backend: Native, fixed-point and string-decimal backends behind one contract
- use_backend / current_backend: Scoped default backend for the current context
"""

from numerus.backends import (
    BackendKind,
    FixedPointBackend,
    MathBackend,
    NativeBackend,
    StringDecimalBackend,
    create_backend,
)
from numerus.config import EngineConfig, EngineConfigError, load_engine_config
from numerus.context import current_backend, use_backend
from numerus.errors import (
    CapabilityUnavailableError,
    DivisionByZeroError,
    EmptyInputError,
    InvalidRangeError,
    NumberParseError,
    NumerusError,
    UnsupportedOperationError,
)
from numerus.numerus import Numerus
from numerus.rounding import RoundingMode

__all__ = [
    "BackendKind",
    "CapabilityUnavailableError",
    "DivisionByZeroError",
    "EmptyInputError",
    "EngineConfig",
    "EngineConfigError",
    "FixedPointBackend",
    "InvalidRangeError",
    "MathBackend",
    "NativeBackend",
    "NumberParseError",
    "Numerus",
    "NumerusError",
    "RoundingMode",
    "StringDecimalBackend",
    "UnsupportedOperationError",
    "create_backend",
    "current_backend",
    "load_engine_config",
    "use_backend",
]

__version__ = "0.1.0"
