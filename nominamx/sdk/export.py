"""Spreadsheet export and display helpers for payroll results.

The clipboard export is two tab-separated lines (header + values) that paste
straight into a spreadsheet. Column order and labels are fixed: existing
sheets depend on them.
"""

import csv
import io

from .payroll import period_divisor
from .schemas import PayrollResult, PayPeriod

PERIOD_LABELS = {
    "weekly": "Semanal",
    "biweekly": "Quincenal",
    "monthly": "Mensual",
}

PERIOD_SHORT_LABELS = {
    "weekly": "Sem.",
    "biweekly": "Quin.",
    "monthly": "Mes.",
}

# (name, color) pairs for the monthly distribution chart
BREAKDOWN_SERIES = [
    ("Sueldo Neto", "#10b981"),
    ("ISR", "#ef4444"),
    ("IMSS (Obrero)", "#f59e0b"),
]


def format_currency(value: float) -> str:
    """Format an amount as Mexican pesos, e.g. -1234.5 -> '-$1,234.50'."""
    if value < 0:
        return f"-${-value:,.2f}"
    return f"${value:,.2f}"


def period_values(result: PayrollResult, period: PayPeriod, days_per_month: float) -> dict:
    """Express monthly worker and employer figures per pay period.

    Returns:
        Dict with gross, net, isr, imss_worker, imss_employer, infonavit, isn
        and total_cost for one period
    """
    divisor = period_divisor(period, days_per_month)
    cost = result.employer_cost
    return {
        "gross": result.gross_monthly / divisor,
        "net": result.net_monthly / divisor,
        "isr": result.isr / divisor,
        "imss_worker": result.imss_worker / divisor,
        "imss_employer": cost.imss_employer / divisor,
        "infonavit": cost.infonavit / divisor,
        "isn": cost.isn / divisor,
        "total_cost": cost.total_monthly / divisor,
    }


def export_header(period: PayPeriod) -> list[str]:
    """Column labels for the spreadsheet export (20 columns)."""
    label = PERIOD_LABELS[period]
    return [
        f"Trabajador Bruto ({label})", f"Trabajador Neto ({label})", f"ISR ({label})", f"IMSS Obrero ({label})",
        "Trabajador Bruto (Mensual)", "Trabajador Neto (Mensual)", "ISR (Mensual)", "IMSS Obrero (Mensual)",
        f"Empresa IMSS Pat. ({label})", f"Empresa INFONAVIT ({label})", f"Empresa ISN ({label})", f"Empresa Costo Total ({label})",
        "Empresa IMSS Pat. (Mensual)", "Empresa INFONAVIT (Mensual)", "Empresa ISN (Mensual)", "Empresa Costo Total (Mensual)",
        "Anual Aguinaldo", "Anual Prima Vacacional", "Anual Neto Total", "Anual Costo Patronal",
    ]


def export_row(result: PayrollResult, period: PayPeriod, days_per_month: float) -> list[str]:
    """Values matching export_header(), formatted to two decimals."""
    pv = period_values(result, period, days_per_month)
    cost = result.employer_cost
    values = [
        pv["gross"], pv["net"], pv["isr"], pv["imss_worker"],
        result.gross_monthly, result.net_monthly, result.isr, result.imss_worker,
        pv["imss_employer"], pv["infonavit"], pv["isn"], pv["total_cost"],
        cost.imss_employer, cost.infonavit, cost.isn, cost.total_monthly,
        result.aguinaldo, result.vacation_premium, result.net_annual, cost.total_annual,
    ]
    return [f"{v:.2f}" for v in values]


def to_clipboard_text(result: PayrollResult, period: PayPeriod, days_per_month: float) -> str:
    """Header and value lines joined by tabs, ready to paste into a sheet."""
    output = io.StringIO()
    writer = csv.writer(output, delimiter="\t", lineterminator="\n")
    writer.writerow(export_header(period))
    writer.writerow(export_row(result, period, days_per_month))
    return output.getvalue().rstrip("\n")


def breakdown(result: PayrollResult) -> list[dict]:
    """Monthly gross split into net pay, ISR and IMSS worker for charting."""
    values = [result.net_monthly, result.isr, result.imss_worker]
    return [
        {"name": name, "value": value, "color": color}
        for (name, color), value in zip(BREAKDOWN_SERIES, values)
    ]
