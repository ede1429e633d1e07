"""Pytest configuration and fixtures for Numerus tests.

This module provides common fixtures and configuration for all tests.
"""

from __future__ import annotations

import pytest

from numerus.backends import FixedPointBackend, NativeBackend, StringDecimalBackend
from numerus.config import ENV_BACKEND, ENV_SCALE


@pytest.fixture(autouse=True)
def clear_engine_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test against the default engine configuration.

    Tests that exercise NUMERUS_BACKEND / NUMERUS_SCALE set them explicitly.
    """
    monkeypatch.delenv(ENV_BACKEND, raising=False)
    monkeypatch.delenv(ENV_SCALE, raising=False)


@pytest.fixture
def native() -> NativeBackend:
    """Return a native backend."""
    return NativeBackend()


@pytest.fixture
def fixed_point() -> FixedPointBackend:
    """Return a fixed-point backend at the default scale (10)."""
    return FixedPointBackend()


@pytest.fixture
def string_decimal() -> StringDecimalBackend:
    """Return a string-decimal backend at the default scale (10)."""
    return StringDecimalBackend()
