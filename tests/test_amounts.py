"""Tests for UI amount <-> base unit conversion."""

from decimal import Decimal

import pytest

from solmint.amounts import from_base_units, to_base_units
from solmint.config import U64_MAX
from solmint.errors import ConversionError


class TestToBaseUnits:
    def test_scales_by_decimals(self):
        assert to_base_units(Decimal("1.5"), 2) == 150

    def test_too_many_fractional_digits(self):
        with pytest.raises(ConversionError, match="fractional digits"):
            to_base_units(Decimal("1.234"), 2)

    def test_trailing_zeros_are_exact(self):
        assert to_base_units(Decimal("1.500"), 1) == 15

    def test_zero_decimals(self):
        assert to_base_units(Decimal("42"), 0) == 42
        with pytest.raises(ConversionError):
            to_base_units(Decimal("42.1"), 0)

    def test_zero_amount(self):
        assert to_base_units(Decimal("0"), 9) == 0
        assert to_base_units(Decimal("-0.0"), 9) == 0

    def test_exponent_notation(self):
        assert to_base_units(Decimal("1E+3"), 6) == 1_000_000_000
        assert to_base_units(Decimal("5E-6"), 6) == 5

    @pytest.mark.parametrize("value", ["1.5", 1.5, Decimal("1.5")])
    def test_accepts_str_float_decimal(self, value):
        assert to_base_units(value, 9) == 1_500_000_000

    def test_float_uses_shortest_repr(self):
        assert to_base_units(0.1, 1) == 1

    def test_u64_max_fits(self):
        assert to_base_units(Decimal(U64_MAX), 0) == U64_MAX

    def test_overflow(self):
        with pytest.raises(ConversionError, match="overflows"):
            to_base_units(Decimal(U64_MAX) + 1, 0)
        with pytest.raises(ConversionError, match="overflows"):
            to_base_units(Decimal("18446744073.709551616"), 9)

    def test_huge_exponent_overflows_without_computing(self):
        with pytest.raises(ConversionError, match="overflows"):
            to_base_units(Decimal("1E+1000000"), 9)

    def test_huge_negative_exponent_rejected_without_computing(self):
        with pytest.raises(ConversionError, match="fractional digits"):
            to_base_units(Decimal("1E-999999999"), 9)

    def test_trailing_zeros_beyond_decimals_are_exact(self):
        assert to_base_units(Decimal("1.50000000000000000000"), 1) == 15

    def test_negative_rejected(self):
        with pytest.raises(ConversionError, match="negative"):
            to_base_units(Decimal("-1"), 2)

    @pytest.mark.parametrize("value", [Decimal("NaN"), Decimal("Infinity")])
    def test_non_finite_rejected(self, value):
        with pytest.raises(ConversionError, match="finite"):
            to_base_units(value, 2)

    def test_garbage_rejected(self):
        with pytest.raises(ConversionError, match="Not a number"):
            to_base_units("one", 2)

    def test_decimals_out_of_range(self):
        with pytest.raises(ConversionError, match="Decimals"):
            to_base_units(Decimal("1"), 256)


class TestRoundTrip:
    @pytest.mark.parametrize("amount,decimals", [
        ("1.5", 2),
        ("0.000000001", 9),
        ("123456.789", 3),
        ("7", 0),
    ])
    def test_round_trip_recovers_amount(self, amount, decimals):
        base = to_base_units(Decimal(amount), decimals)
        assert from_base_units(base, decimals) == Decimal(amount)

    def test_from_base_units_rejects_negative(self):
        with pytest.raises(ConversionError):
            from_base_units(-1, 2)
