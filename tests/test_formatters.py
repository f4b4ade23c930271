"""Tests for display formatters."""
from utils.formatters import format_money, format_pct, format_units


class TestFormatMoney:
    def test_default_rupee(self):
        assert format_money(1234567.89) == "₹1,234,568"

    def test_symbol_and_decimals(self):
        assert format_money(1050.5, "$", 2) == "$1,050.50"

    def test_negative(self):
        assert format_money(-500, "$") == "-$500"

    def test_none(self):
        assert format_money(None) == "N/A"


class TestFormatPct:
    def test_positive(self):
        assert format_pct(12.345) == "+12.35%"

    def test_negative(self):
        assert format_pct(-3.1, decimals=1) == "-3.1%"

    def test_color(self):
        assert format_pct(5, with_color=True) == "[green]+5.00%[/green]"
        assert format_pct(-5, with_color=True) == "[red]-5.00%[/red]"

    def test_none(self):
        assert format_pct(None) == "N/A"


class TestFormatUnits:
    def test_units(self):
        assert format_units(13.6776) == "13.68 units"
        assert format_units(1234.5, decimals=1) == "1,234.5 units"

    def test_none(self):
        assert format_units(None) == "N/A"
