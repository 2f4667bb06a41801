"""Tests for spreadsheet export, per-period values and currency formatting."""

import pytest

from nominamx.sdk import CompensationInput, calculate
from nominamx.sdk.export import (
    breakdown,
    export_header,
    export_row,
    format_currency,
    period_values,
    to_clipboard_text,
)


@pytest.fixture
def monthly_result(rules_2024):
    return calculate(CompensationInput(gross_pay=5000, pay_period="monthly"), rules_2024)


@pytest.fixture
def weekly_result(rules_2024):
    return calculate(CompensationInput(gross_pay=5000, pay_period="weekly"), rules_2024)


class TestHeader:

    def test_twenty_columns(self):
        for period in ("weekly", "biweekly", "monthly"):
            assert len(export_header(period)) == 20

    def test_weekly_labels(self):
        header = export_header("weekly")
        assert header[0] == "Trabajador Bruto (Semanal)"
        assert header[3] == "IMSS Obrero (Semanal)"
        assert header[4] == "Trabajador Bruto (Mensual)"
        assert header[8] == "Empresa IMSS Pat. (Semanal)"
        assert header[11] == "Empresa Costo Total (Semanal)"
        assert header[15] == "Empresa Costo Total (Mensual)"
        assert header[16:] == [
            "Anual Aguinaldo", "Anual Prima Vacacional", "Anual Neto Total", "Anual Costo Patronal",
        ]

    def test_biweekly_label(self):
        assert export_header("biweekly")[1] == "Trabajador Neto (Quincenal)"


class TestRow:

    def test_monthly_values(self, monthly_result):
        row = export_row(monthly_result, "monthly", 30.4)
        assert len(row) == 20
        assert row[:4] == ["5000.00", "4571.77", "286.57", "141.66"]
        # Per-period equals monthly for monthly pay
        assert row[:4] == row[4:8]
        assert row[8:12] == row[12:16]
        assert row[12:16] == ["1154.25", "262.33", "150.00", "6566.58"]
        assert row[16:] == ["2467.11", "493.42", "57821.76", "82647.59"]

    def test_weekly_period_column_is_stated_gross(self, weekly_result):
        row = export_row(weekly_result, "weekly", 30.4)
        assert row[0] == "5000.00"
        assert row[4] == "21714.29"

    def test_clipboard_text(self, monthly_result):
        text = to_clipboard_text(monthly_result, "monthly", 30.4)
        lines = text.split("\n")
        assert len(lines) == 2
        assert lines[0].split("\t") == export_header("monthly")
        assert lines[1].split("\t") == export_row(monthly_result, "monthly", 30.4)


class TestPeriodValues:

    def test_biweekly_halves_monthly(self, rules_2024):
        result = calculate(CompensationInput(gross_pay=12000, pay_period="biweekly"), rules_2024)
        pv = period_values(result, "biweekly", 30.4)
        assert pv["gross"] == 12000
        assert pv["net"] == pytest.approx(result.net_monthly / 2)
        assert pv["total_cost"] == pytest.approx(result.employer_cost.total_monthly / 2)

    def test_weekly_divisor(self, weekly_result):
        pv = period_values(weekly_result, "weekly", 30.4)
        assert pv["gross"] == pytest.approx(5000)
        assert pv["isr"] == pytest.approx(weekly_result.isr / (30.4 / 7))


class TestBreakdown:

    def test_slices_sum_to_gross(self, monthly_result):
        items = breakdown(monthly_result)
        assert [i["name"] for i in items] == ["Sueldo Neto", "ISR", "IMSS (Obrero)"]
        assert sum(i["value"] for i in items) == pytest.approx(monthly_result.gross_monthly)
        assert all(i["color"].startswith("#") for i in items)


class TestFormatCurrency:

    @pytest.mark.parametrize("value,expected", [
        (0, "$0.00"),
        (5000, "$5,000.00"),
        (1234567.891, "$1,234,567.89"),
        (-1234.5, "-$1,234.50"),
    ])
    def test_format(self, value, expected):
        assert format_currency(value) == expected
