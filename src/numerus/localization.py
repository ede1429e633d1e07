"""Localization boundary for the Numerus façade.

Locale-aware parsing and formatting are delegated to a ``NumberLocalizer``.
The façade only hands it text to parse or a Decimal to render; once a
canonical decimal string comes back, no precision is lost.

``PlainLocalizer`` is the locale-neutral default. It accepts only the ``C`` /
``POSIX`` locale (or no locale) and refuses anything else, so a locale is
never silently ignored.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Final, Protocol

from numerus.codec import plain_string, to_decimal_string
from numerus.errors import NumberParseError, UnsupportedOperationError
from numerus.rounding import round_decimal

NEUTRAL_LOCALES: Final[frozenset[str]] = frozenset({"c", "posix"})

# Grouping characters tolerated (and dropped) when parsing.
_GROUPING_SEPARATORS: Final[tuple[str, ...]] = (",", "_")


class NumberLocalizer(Protocol):
    """Locale-aware parser and formatter collaborator."""

    def parse(self, text: str, locale: str | None = None) -> str:
        """Parse locale-formatted text into a canonical decimal string.

        Raises:
            NumberParseError: If the text is not a number in that locale.
        """
        ...

    def format(self, value: Decimal, precision: int = 0, locale: str | None = None) -> str:
        """Render a value with ``precision`` fractional digits for a locale."""
        ...


class PlainLocalizer:
    """Locale-neutral localizer: canonical decimal strings in, plain strings out."""

    def _check_locale(self, locale: str | None, operation: str) -> None:
        if locale is None or locale.strip().lower() in NEUTRAL_LOCALES:
            return
        raise UnsupportedOperationError(
            f"Locale '{locale}' requires a locale-aware NumberLocalizer",
            operation=operation,
        )

    def parse(self, text: str, locale: str | None = None) -> str:
        self._check_locale(locale, "parse")

        cleaned = text.strip()
        for separator in _GROUPING_SEPARATORS:
            cleaned = cleaned.replace(separator, "")
        if not cleaned:
            raise NumberParseError(text, locale=locale)

        try:
            return to_decimal_string(cleaned)
        except NumberParseError as e:
            raise NumberParseError(text, locale=locale) from e

    def format(self, value: Decimal, precision: int = 0, locale: str | None = None) -> str:
        self._check_locale(locale, "format")
        return plain_string(round_decimal(value, precision))

    def __repr__(self) -> str:
        return "PlainLocalizer()"
