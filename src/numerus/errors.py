"""Numerus error types.

Provides the typed exception taxonomy shared by the codec, the rounding
engine, every backend and the Numerus value façade. All errors are
fail-closed: an operation whose preconditions are violated raises instead of
substituting a default value.

Each concrete error also derives from the closest builtin exception so that
callers catching ``ZeroDivisionError`` or ``ValueError`` keep working.
"""

from __future__ import annotations


class NumerusError(Exception):
    """Base exception for all Numerus failures.

    Attributes:
        message: Human-readable error message.
        operation: Name of the operation that detected the violation (if known).
    """

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f"{self.message} operation={self.operation}"
        return self.message


class CapabilityUnavailableError(NumerusError, RuntimeError):
    """Raised when a backend cannot be constructed on this runtime.

    Fatal to the construction attempt only. Callers recover by selecting a
    different backend or scale.
    """

    def __init__(
        self,
        capability: str,
        *,
        backend: str | None = None,
    ) -> None:
        message = f"Required capability unavailable: {capability}"
        if backend:
            message = f"{message} (backend={backend})"
        super().__init__(message, operation="construct")
        self.capability = capability
        self.backend = backend


class DivisionByZeroError(NumerusError, ZeroDivisionError):
    """Raised when a divisor is exactly zero."""

    def __init__(
        self,
        message: str = "Division by zero",
        *,
        operation: str | None = None,
    ) -> None:
        super().__init__(message, operation=operation)


class UnsupportedOperationError(NumerusError, ValueError):
    """Raised when an operation's preconditions are violated.

    Examples: a fractional or negative exponent on the fixed-point backend,
    the square root of a negative number, or the factorial of a non-integer.
    """


class InvalidRangeError(NumerusError, ValueError):
    """Raised when a range-based operation receives an inverted range."""

    def __init__(self, lower: object, upper: object, *, operation: str = "clamp") -> None:
        super().__init__(
            f"Min value ({lower}) cannot be greater than max value ({upper})",
            operation=operation,
        )
        self.lower = lower
        self.upper = upper


class EmptyInputError(NumerusError, ValueError):
    """Raised when an aggregate needs at least one value and got none."""

    def __init__(self, *, operation: str = "average") -> None:
        super().__init__(f"Cannot calculate {operation} of an empty sequence", operation=operation)


class NumberParseError(NumerusError, ValueError):
    """Raised when text cannot be parsed as a decimal number."""

    def __init__(self, text: str, *, locale: str | None = None) -> None:
        message = f"Unable to parse '{text}' as a number"
        if locale:
            message = f"{message} (locale={locale})"
        super().__init__(message, operation="parse")
        self.text = text
        self.locale = locale
