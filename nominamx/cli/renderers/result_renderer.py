"""Rich renderer for payroll results.

Transforms a PayrollResult into formatted Rich tables: per-period and
monthly columns for worker and employer figures, then annual totals.
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from nominamx.sdk.export import PERIOD_LABELS, breakdown, format_currency, period_values
from nominamx.sdk.schemas import PayrollResult, PayPeriod


def render_result(
    console: Console,
    result: PayrollResult,
    period: PayPeriod,
    days_per_month: float,
    warnings: Optional[list[str]] = None,
) -> None:
    """Render a payroll result.

    Args:
        console: Rich Console instance
        result: Engine output
        period: Pay period the inputs were stated in
        days_per_month: Month length from the tax rules the result was built with
        warnings: Notes to show before the tables
    """
    for warning in warnings or []:
        console.print(Panel(
            f"[yellow]{warning}[/yellow]",
            title="Nota",
            border_style="yellow"
        ))

    pv = period_values(result, period, days_per_month)
    _render_worker_table(console, result, period, pv)
    _render_employer_table(console, result, period, pv)
    _render_annual_table(console, result)
    _render_breakdown(console, result)


def _period_table(title: str, period: PayPeriod) -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("", style="bold", min_width=22)
    table.add_column(PERIOD_LABELS[period], justify="right", min_width=14)
    table.add_column("Mensual", justify="right", min_width=14)
    return table


def _render_worker_table(console: Console, result: PayrollResult, period: PayPeriod, pv: dict) -> None:
    table = _period_table(f"Trabajador ({result.tax_year})", period)

    table.add_row("  Sueldo Bruto", _fmt(pv["gross"]), _fmt(result.gross_monthly))
    table.add_row("  ISR", _fmt(pv["isr"]), _fmt(result.isr))
    table.add_row("  IMSS Obrero", _fmt(pv["imss_worker"]), _fmt(result.imss_worker))
    table.add_row("", "", "")
    table.add_row(
        "[bold green]SUELDO NETO[/bold green]",
        f"[bold green]{_fmt(pv['net'])}[/bold green]",
        f"[bold green]{_fmt(result.net_monthly)}[/bold green]",
    )
    table.add_row(
        "SBC diario",
        "",
        f"{_fmt(result.sbc)} (x{result.integration_factor:.4f})",
        style="dim",
    )

    console.print(table)


def _render_employer_table(console: Console, result: PayrollResult, period: PayPeriod, pv: dict) -> None:
    cost = result.employer_cost
    table = _period_table("Empresa", period)

    table.add_row("  IMSS Patronal", _fmt(pv["imss_employer"]), _fmt(cost.imss_employer))
    table.add_row("  INFONAVIT", _fmt(pv["infonavit"]), _fmt(cost.infonavit))
    table.add_row("  ISN", _fmt(pv["isn"]), _fmt(cost.isn))
    table.add_row("", "", "")
    table.add_row(
        "[bold]COSTO TOTAL[/bold]",
        f"[bold]{_fmt(pv['total_cost'])}[/bold]",
        f"[bold]{_fmt(cost.total_monthly)}[/bold]",
    )

    console.print(table)


def _render_annual_table(console: Console, result: PayrollResult) -> None:
    table = Table(title="Anual", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=22)
    table.add_column("Monto", justify="right", min_width=14)

    table.add_row("  Bruto", _fmt(result.gross_annual))
    table.add_row("  Aguinaldo", _fmt(result.aguinaldo))
    table.add_row(f"  Prima Vacacional ({result.vacation_days} días)", _fmt(result.vacation_premium))
    table.add_row("  Neto Total", f"[green]{_fmt(result.net_annual)}[/green]")
    table.add_row("  Costo Patronal", _fmt(result.employer_cost.total_annual))

    console.print(table)


def _render_breakdown(console: Console, result: PayrollResult) -> None:
    """One line per slice of monthly gross with its share."""
    gross = result.gross_monthly
    parts = []
    for item in breakdown(result):
        share = (item["value"] / gross) * 100 if gross else 0
        parts.append(f"{item['name']}: {share:.1f}%")
    console.print(f"[dim]Distribución mensual: {' | '.join(parts)}[/dim]")


def _fmt(amount: float | None) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    return format_currency(amount)
