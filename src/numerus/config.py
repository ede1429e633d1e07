"""Engine configuration for Numerus.

Reads the backend selector and scale from the environment:
- NUMERUS_BACKEND: auto | native | fixed-point | string-decimal (default: auto)
- NUMERUS_SCALE: fractional digits for the fixed-scale backends (default: 10)

An unrecognised selector falls back to ``auto`` with a warning; a malformed
scale is a configuration error.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Final

from numerus.backends.protocol import DEFAULT_SCALE, BackendKind
from numerus.errors import NumerusError

logger = logging.getLogger(__name__)

ENV_BACKEND: Final[str] = "NUMERUS_BACKEND"
ENV_SCALE: Final[str] = "NUMERUS_SCALE"

DEFAULT_BACKEND: Final[BackendKind] = BackendKind.AUTO


class EngineConfigError(NumerusError, ValueError):
    """Raised when engine configuration is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, operation="configure")


@dataclass(frozen=True)
class EngineConfig:
    """Engine configuration (immutable).

    Attributes:
        backend: Backend selector.
        scale: Fractional digits for the fixed-point and string-decimal backends.
    """

    backend: BackendKind = DEFAULT_BACKEND
    scale: int = DEFAULT_SCALE

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not isinstance(self.backend, BackendKind):
            raise EngineConfigError(f"backend must be a BackendKind, got {self.backend!r}")
        if isinstance(self.scale, bool) or not isinstance(self.scale, int) or self.scale < 0:
            raise EngineConfigError(
                f"{ENV_SCALE} must be a non-negative integer, got {self.scale!r}"
            )


def _parse_scale(env_var: str, default: int) -> int:
    """Parse a non-negative integer from an environment variable.

    Raises:
        EngineConfigError: If the value is set but not a non-negative integer.
    """
    raw = os.environ.get(env_var)
    if raw is None:
        return default

    raw = raw.strip()
    if not raw:
        return default

    try:
        value = int(raw)
    except ValueError as e:
        raise EngineConfigError(f"{env_var} must be a non-negative integer, got '{raw}'") from e

    if value < 0:
        raise EngineConfigError(f"{env_var} must be a non-negative integer, got {value}")

    return value


def load_engine_config() -> EngineConfig:
    """Load engine configuration from environment variables.

    Environment variables:
        NUMERUS_BACKEND: Backend selector (default: auto)
        NUMERUS_SCALE: Scale for fixed-scale backends (default: 10)

    Returns:
        EngineConfig with validated values.

    Raises:
        EngineConfigError: If NUMERUS_SCALE is not a non-negative integer.
    """
    backend = BackendKind.parse(os.environ.get(ENV_BACKEND))
    scale = _parse_scale(ENV_SCALE, DEFAULT_SCALE)

    logger.debug("Loaded engine config: backend=%s scale=%s", backend.value, scale)
    return EngineConfig(backend=backend, scale=scale)
