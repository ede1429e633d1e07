"""Tests for the localization boundary."""

from __future__ import annotations

from decimal import Decimal

import pytest

from numerus import Numerus
from numerus.errors import NumberParseError, UnsupportedOperationError
from numerus.localization import NumberLocalizer, PlainLocalizer


class CommaDecimalLocalizer:
    """Minimal localizer for ``1.234,5`` style input, used to test injection."""

    def parse(self, text: str, locale: str | None = None) -> str:
        return text.strip().replace(".", "").replace(",", ".")

    def format(self, value: Decimal, precision: int = 0, locale: str | None = None) -> str:
        return f"{value:.{precision}f}".replace(".", ",")


class TestPlainLocalizerParse:
    """Tests for PlainLocalizer.parse()."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("42", "42"),
            (" -1,234.50 ", "-1234.50"),
            ("1_000", "1000"),
            ("2.5e2", "250"),
        ],
    )
    def test_parse(self, text: str, expected: str) -> None:
        """Test grouping separators are dropped and exponents expanded."""
        assert PlainLocalizer().parse(text) == expected

    @pytest.mark.parametrize("locale", [None, "C", "posix", " POSIX "])
    def test_neutral_locales(self, locale: str | None) -> None:
        """Test the neutral locales are accepted."""
        assert PlainLocalizer().parse("1.5", locale) == "1.5"

    def test_other_locale_refused(self) -> None:
        """Test a real locale is never silently ignored."""
        with pytest.raises(UnsupportedOperationError) as exc_info:
            PlainLocalizer().parse("1,5", "fr_FR")
        assert exc_info.value.operation == "parse"

    @pytest.mark.parametrize("text", ["", "   ", ",", "1.2.3", "abc"])
    def test_unparsable(self, text: str) -> None:
        """Test unparsable text raises NumberParseError carrying the input."""
        with pytest.raises(NumberParseError) as exc_info:
            PlainLocalizer().parse(text, "C")
        assert exc_info.value.text == text
        assert exc_info.value.locale == "C"


class TestPlainLocalizerFormat:
    """Tests for PlainLocalizer.format()."""

    def test_format(self) -> None:
        """Test rounding half away from zero at the precision."""
        localizer = PlainLocalizer()
        assert localizer.format(Decimal("2.675"), 2) == "2.68"
        assert localizer.format(Decimal("-0.4")) == "0"
        assert localizer.format(Decimal(7), 3) == "7.000"

    def test_repr(self) -> None:
        """Test the repr."""
        assert repr(PlainLocalizer()) == "PlainLocalizer()"


class TestInjectedLocalizer:
    """Tests for passing a custom localizer to the façade."""

    def test_protocol_conformance(self) -> None:
        """Test a plain class satisfies the protocol structurally."""
        localizer: NumberLocalizer = CommaDecimalLocalizer()
        assert localizer.parse("1.234,5") == "1234.5"

    def test_create_and_format(self) -> None:
        """Test the façade delegates parsing and formatting."""
        localizer = CommaDecimalLocalizer()
        value = Numerus.create("1.234,5", locale="de_DE", localizer=localizer)
        assert value.to_string() == "1234.5"
        assert value.format(2, "de_DE", localizer) == "1234,50"

    def test_parse_int_with_localizer(self) -> None:
        """Test parse_int truncates the localized value."""
        value = Numerus.parse_int("-7,9", localizer=CommaDecimalLocalizer())
        assert value.to_string() == "-7"
