"""NominaMX CLI - Command-line interface for Mexican payroll calculations."""

import json

import click
from rich.console import Console
from rich.table import Table

from nominamx import __version__
from nominamx.sdk import (
    PAY_PERIODS,
    InvalidCompensationError,
    SettingsError,
    TaxRulesNotFoundError,
    TaxRulesValidationError,
    calculate,
    check_minimum_wage,
    format_currency,
    get_available_years,
    get_default_year,
    get_setting,
    load_tax_rules,
    to_clipboard_text,
    validate_compensation,
    vacation_days,
)

from .renderers.result_renderer import render_result
from .settings_commands import settings as settings_group


DEFAULT_BONUS_DAYS = 15
DEFAULT_PAYROLL_TAX_RATE = 3.0


class NominaGroup(click.Group):
    """Reports a broken settings.json as a usage error instead of a traceback."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except SettingsError as e:
            raise click.ClickException(str(e))


@click.group(cls=NominaGroup)
@click.version_option(version=__version__, prog_name="nominamx")
def cli():
    """NominaMX - Mexican payroll calculator.

    Computes ISR, IMSS, aguinaldo, prima vacacional, INFONAVIT, ISN and
    total employer cost from a gross salary.

    Defaults are loaded from (in order):

    \b
    1. Command-line options
    2. settings.json in NOMINAMX_CONFIG_PATH or ~/.config/nominamx/
    3. Legal minimums (15 aguinaldo days, 3% ISN, tax year 2024)

    Run 'nominamx settings show' to see current settings.
    """
    pass


cli.add_command(settings_group)


def compensation_options(func):
    """Options shared by commands that take compensation inputs."""
    options = [
        click.argument("gross", type=float),
        click.option("--period", "-p", type=click.Choice(PAY_PERIODS), default="monthly",
                     show_default=True, help="Period GROSS is stated in"),
        click.option("--years", "-y", type=float, default=1, show_default=True,
                     help="Years of service (floored to completed years)"),
        click.option("--bonus-days", type=float, default=None,
                     help=f"Aguinaldo days (default: setting or {DEFAULT_BONUS_DAYS})"),
        click.option("--vacation-premium-rate", type=float, default=None,
                     help="Prima vacacional as decimal (statutory minimum applies)"),
        click.option("--payroll-tax-rate", type=float, default=None,
                     help=f"State payroll tax percent (default: setting or {DEFAULT_PAYROLL_TAX_RATE:g})"),
        click.option("--year", type=int, default=None, help="Tax year (default: setting)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _resolve_inputs(gross, period, years, bonus_days, vacation_premium_rate, payroll_tax_rate, year):
    """Apply setting defaults, validate, and load rules.

    Returns:
        Tuple of (CompensationInput, TaxYearRules)
    """
    if bonus_days is None:
        bonus_days = get_setting("bonus_days", DEFAULT_BONUS_DAYS)
    if payroll_tax_rate is None:
        payroll_tax_rate = get_setting("payroll_tax_rate", DEFAULT_PAYROLL_TAX_RATE)

    try:
        compensation = validate_compensation({
            "gross_pay": gross,
            "pay_period": period,
            "years_of_service": years,
            "annual_bonus_days": bonus_days,
            "vacation_premium_rate": vacation_premium_rate,
            "payroll_tax_rate": payroll_tax_rate,
        })
    except InvalidCompensationError as e:
        raise click.ClickException(str(e))

    try:
        rules = load_tax_rules(year)
    except (TaxRulesNotFoundError, TaxRulesValidationError) as e:
        raise click.ClickException(str(e))

    return compensation, rules


@cli.command("calc")
@compensation_options
@click.option("--format", "output_format", type=click.Choice(["text", "json", "tsv"]), default="text",
              help="Output format (default: text)")
@click.option("--border-zone", is_flag=True, help="Check against the northern border minimum wage")
def calc(gross, period, years, bonus_days, vacation_premium_rate, payroll_tax_rate, year,
         output_format, border_zone):
    """Calculate net pay and employer cost for a GROSS salary.

    \b
    Examples:
      nominamx calc 5000 --period weekly
      nominamx calc 20000 --years 6 --payroll-tax-rate 3
      nominamx calc 12000 -p biweekly --format tsv | pbcopy
    """
    compensation, rules = _resolve_inputs(
        gross, period, years, bonus_days, vacation_premium_rate, payroll_tax_rate, year
    )
    result = calculate(compensation, rules)

    warnings = []
    if not check_minimum_wage(result.daily_salary, rules, border_zone=border_zone):
        zone = "zona libre de la frontera" if border_zone else "general"
        warnings.append(
            f"Salario diario {format_currency(result.daily_salary)} por debajo del mínimo {zone} {rules.year}"
        )

    if output_format == "json":
        output = {
            "input": compensation.model_dump(),
            "result": result.model_dump(),
            "warnings": warnings,
        }
        click.echo(json.dumps(output, indent=2))
    elif output_format == "tsv":
        click.echo(to_clipboard_text(result, compensation.pay_period, rules.constants.days_per_month))
    else:
        render_result(Console(), result, compensation.pay_period, rules.constants.days_per_month,
                      warnings=warnings)


@cli.command("advise")
@compensation_options
@click.option("--timeout", type=int, default=None, help="Seconds to wait for the advisor")
def advise(gross, period, years, bonus_days, vacation_premium_rate, payroll_tax_rate, year, timeout):
    """Ask the AI advisor whether a GROSS salary is competitive.

    Requires the Gemini CLI on PATH. Failures print a fallback message and
    never affect the calculation.
    """
    from nominamx.sdk.advisor import build_advice_prompt, get_advice

    compensation, rules = _resolve_inputs(
        gross, period, years, bonus_days, vacation_premium_rate, payroll_tax_rate, year
    )
    result = calculate(compensation, rules)

    click.echo(f"Bruto mensual: {format_currency(result.gross_monthly)}")
    click.echo(f"Neto mensual: {format_currency(result.net_monthly)}")
    click.echo(f"Costo total empresa: {format_currency(result.employer_cost.total_monthly)}")
    click.echo()

    prompt = build_advice_prompt(result, compensation.annual_bonus_days)
    click.echo(get_advice(prompt, timeout=timeout))


@cli.command("vacation-days")
@click.argument("years", type=float)
@click.option("--year", type=int, default=None, help="Tax year (default: setting)")
def vacation_days_cmd(years, year):
    """Show statutory vacation days for YEARS of service."""
    try:
        rules = load_tax_rules(year)
    except (TaxRulesNotFoundError, TaxRulesValidationError) as e:
        raise click.ClickException(str(e))

    try:
        days = vacation_days(years, rules.vacation_schedule)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="YEARS")

    click.echo(f"{days} días ({years:g} años de servicio, tablas {rules.year})")


@cli.command("brackets")
@click.option("--year", type=int, default=None, help="Tax year (default: setting)")
def brackets(year):
    """Show the monthly ISR table and payroll constants for a tax year."""
    try:
        rules = load_tax_rules(year)
    except (TaxRulesNotFoundError, TaxRulesValidationError) as e:
        raise click.ClickException(str(e))

    console = Console()
    table = Table(title=f"ISR Mensual {rules.year}", show_header=True, header_style="bold")
    table.add_column("Límite inferior", justify="right")
    table.add_column("Cuota fija", justify="right")
    table.add_column("% excedente", justify="right")
    for bracket in rules.isr_monthly:
        table.add_row(
            format_currency(bracket.lower_bound),
            format_currency(bracket.base_amount),
            f"{bracket.marginal_rate:.2f}%",
        )
    console.print(table)

    console.print("\n[dim]Constants:[/dim]")
    for key, value in rules.constants.model_dump().items():
        if value is not None:
            console.print(f"  [dim]{key}: {value}[/dim]")


@cli.command("years")
def years_cmd():
    """List available tax years."""
    default_year = get_default_year()
    available = get_available_years()
    if not available:
        raise click.ClickException("No tax rules found.")
    for y in available:
        marker = " (default)" if y == default_year else ""
        click.echo(f"{y}{marker}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
