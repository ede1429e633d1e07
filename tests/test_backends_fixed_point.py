"""Tests for the fixed-point (scaled integer) backend."""

from __future__ import annotations

import pytest

from numerus.backends import (
    BackendKind,
    FixedPointBackend,
    StringDecimalBackend,
    capabilities,
)
from numerus.errors import (
    CapabilityUnavailableError,
    DivisionByZeroError,
    UnsupportedOperationError,
)
from numerus.rounding import RoundingMode


class TestFixedPointConstruction:
    """Tests for construction and capability probing."""

    def test_defaults(self, fixed_point: FixedPointBackend) -> None:
        """Test the default scale and the scale factor."""
        assert fixed_point.kind is BackendKind.FIXED_POINT
        assert fixed_point.scale == 10
        assert fixed_point.factor == 10**10

    @pytest.mark.parametrize("scale", [-1, 1.5, True])
    def test_invalid_scale(self, scale: object) -> None:
        """Test negative, fractional and boolean scales are rejected."""
        with pytest.raises(ValueError, match="scale"):
            FixedPointBackend(scale=scale)  # type: ignore[arg-type]

    def test_capability_unavailable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test construction fails when the codec cannot carry scale + 1 digits."""
        monkeypatch.setattr(capabilities, "max_integer_digits", lambda: 5)
        FixedPointBackend(scale=4)
        with pytest.raises(CapabilityUnavailableError) as exc_info:
            FixedPointBackend(scale=5)
        assert exc_info.value.capability == capabilities.ARBITRARY_PRECISION_INTEGERS
        assert exc_info.value.backend == "fixed-point"

    def test_probe_disabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a failing probe blocks every scale."""
        monkeypatch.setattr(capabilities, "has_arbitrary_precision_integers", lambda _d=1: False)
        with pytest.raises(CapabilityUnavailableError):
            FixedPointBackend(scale=0)


class TestFixedPointArithmetic:
    """Tests for exact and truncated arithmetic."""

    def test_add_subtract_exact(self, fixed_point: FixedPointBackend) -> None:
        """Test addition and subtraction lose nothing at scale."""
        assert fixed_point.add("0.1", "0.2") == "0.3"
        assert fixed_point.subtract("1", "1.0000000001") == "-0.0000000001"
        assert fixed_point.add(1, 2) == "3"

    def test_large_values(self, fixed_point: FixedPointBackend) -> None:
        """Test values far beyond float precision stay exact."""
        big = "123456789012345678901234567890.5"
        assert fixed_point.add(big, "0.5") == "123456789012345678901234567891"

    def test_multiply_truncates(self) -> None:
        """Test products are truncated toward zero at scale."""
        backend = FixedPointBackend(scale=2)
        assert backend.multiply("1.25", "1.25") == "1.56"
        assert backend.multiply("-1.25", "1.25") == "-1.56"

    def test_operands_truncated_at_scale(self) -> None:
        """Test operand digits beyond scale are dropped before the operation."""
        backend = FixedPointBackend(scale=2)
        assert backend.add("0.129", "0") == "0.12"

    def test_divide(self, fixed_point: FixedPointBackend) -> None:
        """Test division truncates to scale."""
        assert fixed_point.divide("1", "3") == "0.3333333333"
        assert fixed_point.divide("-2", "3") == "-0.6666666666"
        assert fixed_point.divide("10", "4") == "2.5"

    def test_divide_by_zero(self, fixed_point: FixedPointBackend) -> None:
        """Test division by zero, including a divisor truncated to zero."""
        with pytest.raises(DivisionByZeroError):
            fixed_point.divide("1", "0")
        with pytest.raises(DivisionByZeroError):
            FixedPointBackend(scale=2).divide("1", "0.001")

    def test_mod(self, fixed_point: FixedPointBackend) -> None:
        """Test the remainder has the sign of the dividend."""
        assert fixed_point.mod("10", "3") == "1"
        assert fixed_point.mod("-10", "3") == "-1"
        assert fixed_point.mod("5.5", "2") == "1.5"
        with pytest.raises(DivisionByZeroError):
            fixed_point.mod("1", "0")

    def test_abs_negate(self, fixed_point: FixedPointBackend) -> None:
        """Test sign operations."""
        assert fixed_point.abs("-2.5") == "2.5"
        assert fixed_point.negate("2.5") == "-2.5"
        assert fixed_point.negate("0") == "0"


class TestFixedPointLargeMagnitudes:
    """Tests for values longer than the interpreter's int/str digit limit."""

    def test_power_result_beyond_str_limit(self, fixed_point: FixedPointBackend) -> None:
        """Test a 4401-digit power decodes without a conversion error."""
        assert fixed_point.power("10", 4400) == "1" + "0" * 4400

    def test_multiply_result_beyond_str_limit(self, fixed_point: FixedPointBackend) -> None:
        """Test a product of two 2200-digit operands stays exact."""
        nines = "9" * 2200
        expected = "9" * 2199 + "8" + "0" * 2199 + "1"
        assert fixed_point.multiply(nines, nines) == expected

    def test_large_scale(self) -> None:
        """Test a scale near the str limit encodes its operands."""
        backend = FixedPointBackend(scale=4299)
        assert backend.add("12.5", "1") == "13.5"
        assert backend.ceil("12.5") == "13"

    def test_agrees_with_string_decimal(self, fixed_point: FixedPointBackend) -> None:
        """Test both exact backends produce the same large power."""
        reference = StringDecimalBackend(scale=0).power("10", 4400)
        assert fixed_point.power("10", 4400) == reference


class TestFixedPointRounding:
    """Tests for ceil, floor and round."""

    @pytest.mark.parametrize(
        ("value", "ceil", "floor"),
        [
            ("1.2", "2", "1"),
            ("-1.2", "-1", "-2"),
            ("3", "3", "3"),
            ("-0.5", "0", "-1"),
        ],
    )
    def test_ceil_floor(
        self, fixed_point: FixedPointBackend, value: str, ceil: str, floor: str
    ) -> None:
        """Test ceil and floor round toward the infinities."""
        assert fixed_point.ceil(value) == ceil
        assert fixed_point.floor(value) == floor

    def test_round(self, fixed_point: FixedPointBackend) -> None:
        """Test round returns exactly precision fractional digits."""
        assert fixed_point.round("2.675", 2) == "2.68"
        assert fixed_point.round("2.5", 0, RoundingMode.HALF_EVEN) == "2"
        assert fixed_point.round("1.5", 3) == "1.500"


class TestFixedPointPowerAndRoots:
    """Tests for power and sqrt."""

    def test_power(self, fixed_point: FixedPointBackend) -> None:
        """Test non-negative integer exponents."""
        assert fixed_point.power("0.1", 3) == "0.001"
        assert fixed_point.power("2", 10) == "1024"
        assert fixed_point.power("-1.5", 2) == "2.25"
        assert fixed_point.power("7", 0) == "1"

    @pytest.mark.parametrize("exponent", [-1, 0.5, 1.5, 2.0])
    def test_power_unsupported_exponent(
        self, fixed_point: FixedPointBackend, exponent: float
    ) -> None:
        """Test negative and non-int exponents are unsupported."""
        with pytest.raises(UnsupportedOperationError, match="non-negative integer"):
            fixed_point.power("2", exponent)

    def test_sqrt(self, fixed_point: FixedPointBackend) -> None:
        """Test the integer square root at scale."""
        assert fixed_point.sqrt("2") == "1.4142135623"
        assert fixed_point.sqrt("16") == "4"
        assert fixed_point.sqrt("0") == "0"

    def test_sqrt_negative(self, fixed_point: FixedPointBackend) -> None:
        """Test negative square roots are unsupported."""
        with pytest.raises(UnsupportedOperationError):
            fixed_point.sqrt("-4")


class TestFixedPointParts:
    """Tests for comparison and parts."""

    def test_compare(self, fixed_point: FixedPointBackend) -> None:
        """Test three-way comparison on scaled integers."""
        assert fixed_point.compare("1.5", "1.50") == 0
        assert fixed_point.compare("-1", "0") == -1
        assert fixed_point.compare("0.0000000002", "0.0000000001") == 1

    def test_parts(self, fixed_point: FixedPointBackend) -> None:
        """Test the integer part truncates and the fraction is absolute."""
        assert fixed_point.integer_part("-12.34") == -12
        assert fixed_point.fractional_part("-12.34") == "0.34"
        assert fixed_point.fractional_part("7") == "0"

    def test_min_max(self, fixed_point: FixedPointBackend) -> None:
        """Test min and max."""
        assert fixed_point.min("1.5", "-2") == "-2"
        assert fixed_point.max("1.5", "-2") == "1.5"
