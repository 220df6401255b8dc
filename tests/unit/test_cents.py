"""Tests for am_common.cents."""

from decimal import Decimal

from src.am_common.cents import cents_to_display, to_minor_units


class TestToMinorUnits:
    def test_int_unchanged(self) -> None:
        assert to_minor_units(1500) == 1500

    def test_float_truncated_not_rounded(self) -> None:
        assert to_minor_units(1999.99) == 1999

    def test_decimal_truncated(self) -> None:
        assert to_minor_units(Decimal("250.5")) == 250

    def test_whole_float(self) -> None:
        assert to_minor_units(100.0) == 100


class TestCentsToDisplay:
    def test_basic(self) -> None:
        assert cents_to_display(6500) == "$65.00"

    def test_thousands_separator(self) -> None:
        assert cents_to_display(123456) == "$1,234.56"

    def test_negative(self) -> None:
        assert cents_to_display(-1200) == "-$12.00"

    def test_zero(self) -> None:
        assert cents_to_display(0) == "$0.00"
