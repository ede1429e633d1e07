"""Backend selector - construct a backend from a selector and a scale.

``auto`` walks the preference order (string-decimal, fixed-point, native) and
returns the first backend the runtime can construct. An explicit selector
constructs only that backend and lets its construction error propagate.

Usage:
    from numerus.backends import create_backend

    backend = create_backend("fixed-point", scale=4)
    backend.divide("1", "3")  # "0.3333"
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from numerus.backends.fixed_point import FixedPointBackend
from numerus.backends.native import NativeBackend
from numerus.backends.protocol import DEFAULT_SCALE, BackendKind
from numerus.backends.string_decimal import StringDecimalBackend
from numerus.errors import CapabilityUnavailableError

if TYPE_CHECKING:
    from numerus.config import EngineConfig

logger = logging.getLogger(__name__)

Backend = NativeBackend | FixedPointBackend | StringDecimalBackend

AUTO_PREFERENCE: Final[tuple[BackendKind, ...]] = (
    BackendKind.STRING_DECIMAL,
    BackendKind.FIXED_POINT,
    BackendKind.NATIVE,
)


def _construct(kind: BackendKind, scale: int) -> Backend:
    match kind:
        case BackendKind.NATIVE:
            return NativeBackend()
        case BackendKind.FIXED_POINT:
            return FixedPointBackend(scale=scale)
        case BackendKind.STRING_DECIMAL:
            return StringDecimalBackend(scale=scale)
        case BackendKind.AUTO:
            raise ValueError("AUTO is resolved by create_backend, not constructed")


def create_backend(
    kind: str | BackendKind = BackendKind.AUTO,
    scale: int = DEFAULT_SCALE,
) -> Backend:
    """Create a backend.

    Args:
        kind: Selector value or string; unrecognised strings mean ``auto``.
        scale: Fractional digits for the fixed-scale backends.

    Returns:
        The constructed backend.

    Raises:
        ValueError: If scale is negative or not an int.
        CapabilityUnavailableError: If an explicitly selected backend cannot
            be constructed, or (under ``auto``) none can.
    """
    if isinstance(scale, bool) or not isinstance(scale, int) or scale < 0:
        raise ValueError(f"scale must be a non-negative integer, got {scale!r}")

    selected = BackendKind.parse(kind)
    if selected is not BackendKind.AUTO:
        backend = _construct(selected, scale)
        logger.info("Created %s backend (scale=%s)", selected.value, backend.scale)
        return backend

    last_error: CapabilityUnavailableError | None = None
    for candidate in AUTO_PREFERENCE:
        try:
            backend = _construct(candidate, scale)
        except CapabilityUnavailableError as e:
            logger.debug("Skipping %s backend: %s", candidate.value, e)
            last_error = e
            continue
        logger.info("Auto-selected %s backend (scale=%s)", candidate.value, backend.scale)
        return backend

    # Native has no capability requirement; only reachable if it is patched out.
    assert last_error is not None
    raise last_error


def create_backend_from_config(config: EngineConfig) -> Backend:
    """Create a backend from a loaded engine configuration."""
    return create_backend(config.backend, config.scale)


def available_backends(scale: int = DEFAULT_SCALE) -> dict[BackendKind, str | None]:
    """Probe every concrete backend at ``scale``.

    Returns:
        Mapping of backend kind to None when it constructs, or the reason it
        cannot, in preference order.
    """
    report: dict[BackendKind, str | None] = {}
    for candidate in AUTO_PREFERENCE:
        try:
            _construct(candidate, scale)
        except CapabilityUnavailableError as e:
            report[candidate] = str(e)
        else:
            report[candidate] = None
    return report
