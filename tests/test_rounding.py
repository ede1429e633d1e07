"""Tests for the rounding-mode engine.

Verifies the tie-break table for all eight modes, precision handling and the
rounded division helper.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from numerus.errors import DivisionByZeroError
from numerus.rounding import (
    DEFAULT_ROUNDING_MODE,
    RoundingMode,
    divide_rounded,
    round_decimal,
    round_float,
    round_to_integer,
)

TIE_TABLE: list[tuple[RoundingMode, str, str]] = [
    (RoundingMode.AWAY_FROM_ZERO, "3", "-3"),
    (RoundingMode.TOWARDS_ZERO, "2", "-2"),
    (RoundingMode.POSITIVE_INFINITY, "3", "-2"),
    (RoundingMode.NEGATIVE_INFINITY, "2", "-3"),
    (RoundingMode.HALF_AWAY_FROM_ZERO, "3", "-3"),
    (RoundingMode.HALF_TOWARDS_ZERO, "2", "-2"),
    (RoundingMode.HALF_EVEN, "2", "-2"),
    (RoundingMode.HALF_ODD, "3", "-3"),
]


class TestRoundingModeTable:
    """Tests for the 2.5 / -2.5 tie table."""

    @pytest.mark.parametrize(("mode", "positive", "negative"), TIE_TABLE)
    def test_tie_at_two_and_a_half(self, mode: RoundingMode, positive: str, negative: str) -> None:
        """Test each mode resolves 2.5 and -2.5 per the table."""
        assert round_decimal(Decimal("2.5"), 0, mode) == Decimal(positive)
        assert round_decimal(Decimal("-2.5"), 0, mode) == Decimal(negative)

    def test_table_covers_every_mode(self) -> None:
        """Test the table lists each mode exactly once."""
        assert {mode for mode, _, _ in TIE_TABLE} == set(RoundingMode)

    def test_half_even_and_half_odd_follow_parity(self) -> None:
        """Test 3.5 rounds up under HALF_EVEN and down under HALF_ODD."""
        assert round_decimal(Decimal("3.5"), 0, RoundingMode.HALF_EVEN) == Decimal("4")
        assert round_decimal(Decimal("3.5"), 0, RoundingMode.HALF_ODD) == Decimal("3")

    @pytest.mark.parametrize("mode", list(RoundingMode))
    def test_exact_integers_unchanged(self, mode: RoundingMode) -> None:
        """Test integral values never move."""
        assert round_decimal(Decimal("-7"), 0, mode) == Decimal("-7")
        assert round_decimal(Decimal("7.000"), 0, mode) == Decimal("7")

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            (RoundingMode.HALF_AWAY_FROM_ZERO, "3"),
            (RoundingMode.HALF_TOWARDS_ZERO, "3"),
            (RoundingMode.HALF_EVEN, "3"),
            (RoundingMode.HALF_ODD, "3"),
            (RoundingMode.TOWARDS_ZERO, "2"),
        ],
    )
    def test_above_half(self, mode: RoundingMode, expected: str) -> None:
        """Test fractions above one half step for every half mode."""
        assert round_decimal(Decimal("2.5000001"), 0, mode) == Decimal(expected)


class TestRoundDecimal:
    """Tests for round_decimal() precision handling."""

    def test_default_mode_is_half_away_from_zero(self) -> None:
        """Test the default mode."""
        assert DEFAULT_ROUNDING_MODE is RoundingMode.HALF_AWAY_FROM_ZERO
        assert round_decimal(Decimal("2.5")) == Decimal("3")
        assert round_decimal(Decimal("-2.5")) == Decimal("-3")

    def test_decimal_tie_classified_exactly(self) -> None:
        """Test 2.675 is a true tie at two places (it is not as a float)."""
        assert str(round_decimal(Decimal("2.675"), 2)) == "2.68"
        assert str(round_decimal(Decimal("-1.005"), 2)) == "-1.01"

    def test_result_has_exactly_precision_digits(self) -> None:
        """Test the result is padded to exactly the requested digits."""
        assert str(round_decimal(Decimal("1.5"), 3)) == "1.500"
        assert str(round_decimal(Decimal("2"), 2)) == "2.00"

    def test_negative_precision_rounds_to_tens(self) -> None:
        """Test negative precision rounds left of the decimal point."""
        assert str(round_decimal(Decimal("1234.5"), -2)) == "1200"
        assert str(round_decimal(Decimal("1250"), -2, RoundingMode.HALF_EVEN)) == "1200"
        assert str(round_decimal(Decimal("1350"), -2, RoundingMode.HALF_EVEN)) == "1400"

    def test_zero_result_has_no_sign(self) -> None:
        """Test a negative value rounding to zero renders as plain zero."""
        assert str(round_decimal(Decimal("-0.4"))) == "0"
        assert str(round_decimal(Decimal("-0.004"), 2)) == "0.00"

    def test_round_to_integer_has_no_fraction(self) -> None:
        """Test round_to_integer returns an integral Decimal."""
        result = round_to_integer(Decimal("-9.99"), RoundingMode.TOWARDS_ZERO)
        assert result == Decimal("-9")

    def test_round_float(self) -> None:
        """Test floats round through their decimal repr."""
        assert round_float(2.675, 2) == 2.68
        assert round_float(-2.5, 0, RoundingMode.HALF_EVEN) == -2.0
        assert isinstance(round_float(3, 0), float)


class TestRoundingModeParse:
    """Tests for RoundingMode.parse()."""

    @pytest.mark.parametrize("text", ["half-even", "HALF_EVEN", "HalfEven", " half_even "])
    def test_parse_forms(self, text: str) -> None:
        """Test values, names and camel case all parse."""
        assert RoundingMode.parse(text) is RoundingMode.HALF_EVEN

    def test_parse_unknown_raises(self) -> None:
        """Test unknown modes are rejected with the valid options listed."""
        with pytest.raises(ValueError, match="half-odd"):
            RoundingMode.parse("bankers")


class TestDivideRounded:
    """Tests for divide_rounded()."""

    def test_repeating_quotients(self) -> None:
        """Test repeating decimals round half away from zero."""
        assert divide_rounded(Decimal(1), Decimal(3), 10) == Decimal("0.3333333333")
        assert divide_rounded(Decimal(2), Decimal(3), 10) == Decimal("0.6666666667")
        assert divide_rounded(Decimal(-2), Decimal(3), 10) == Decimal("-0.6666666667")

    def test_exact_quotient_has_precision_digits(self) -> None:
        """Test exact quotients are padded to precision."""
        assert str(divide_rounded(Decimal(10), Decimal(4), 10)) == "2.5000000000"

    def test_exact_tie_uses_mode(self) -> None:
        """Test an exact tie follows the tie-break policy."""
        assert divide_rounded(Decimal(1), Decimal(2), 0, RoundingMode.HALF_EVEN) == Decimal(0)
        assert divide_rounded(Decimal(3), Decimal(2), 0, RoundingMode.HALF_EVEN) == Decimal(2)
        assert divide_rounded(Decimal(1), Decimal(2), 0, RoundingMode.HALF_TOWARDS_ZERO) == 0

    def test_near_tie_is_not_mistaken_for_tie(self) -> None:
        """Test a quotient just above one half rounds up under tie-averse modes."""
        dividend = Decimal("10000000000001")
        divisor = Decimal("20000000000000")
        assert divide_rounded(dividend, divisor, 0, RoundingMode.HALF_TOWARDS_ZERO) == 1
        assert divide_rounded(dividend, divisor, 0, RoundingMode.HALF_EVEN) == 1
        assert divide_rounded(-dividend, divisor, 0, RoundingMode.HALF_TOWARDS_ZERO) == -1

    def test_zero_dividend(self) -> None:
        """Test zero divided by anything is zero."""
        assert divide_rounded(Decimal(0), Decimal(7), 4) == Decimal(0)

    def test_zero_divisor_raises(self) -> None:
        """Test division by zero raises with the operation name."""
        with pytest.raises(DivisionByZeroError) as exc_info:
            divide_rounded(Decimal(1), Decimal(0), 10, operation="average")
        assert exc_info.value.operation == "average"
