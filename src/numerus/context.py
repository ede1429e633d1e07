"""Scoped default backend.

The active backend is carried in a ContextVar, so an override applies only to
the current thread or asyncio task and is undone when its scope exits:

    with use_backend(create_backend("fixed-point", scale=4)):
        Numerus.create("1").divide_by(3)  # runs on the fixed-point backend

Outside any scope, ``current_backend()`` builds a backend from the environment
configuration on each call; nothing is cached process-wide.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

from numerus.backends.selector import Backend, create_backend_from_config
from numerus.config import load_engine_config

if TYPE_CHECKING:
    from collections.abc import Generator

logger = logging.getLogger(__name__)

_ACTIVE_BACKEND: ContextVar[Backend | None] = ContextVar("numerus_backend", default=None)


def current_backend() -> Backend:
    """Return the backend bound to the current context.

    Falls back to a backend built from ``load_engine_config()`` when no scope
    is active.

    Raises:
        EngineConfigError: If the environment configuration is invalid.
        CapabilityUnavailableError: If the configured backend cannot be built.
    """
    backend = _ACTIVE_BACKEND.get()
    if backend is not None:
        return backend
    return create_backend_from_config(load_engine_config())


@contextmanager
def use_backend(backend: Backend) -> Generator[Backend, None, None]:
    """Bind ``backend`` as the active backend for the scope lifetime.

    Yields:
        The bound backend.
    """
    token = _ACTIVE_BACKEND.set(backend)
    logger.debug("Bound %s backend to current context", backend.kind.value)
    try:
        yield backend
    finally:
        _ACTIVE_BACKEND.reset(token)
