"""NominaMX MCP Server - FastMCP implementation for payroll tools."""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from nominamx.sdk import (
    AdvisorSession,
    InvalidCompensationError,
    SettingsError,
    TaxRulesNotFoundError,
    TaxRulesValidationError,
    calculate,
    get_available_years,
    get_default_year,
    load_tax_rules,
    period_values,
    to_clipboard_text,
    validate_compensation,
    vacation_days,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("nominamx")

# One advisor per server: a newer advice request supersedes an older one
_advisor = AdvisorSession()


def _compensation(gross_pay, pay_period, years_of_service, annual_bonus_days,
                  vacation_premium_rate, payroll_tax_rate) -> dict:
    return {
        "gross_pay": gross_pay,
        "pay_period": pay_period,
        "years_of_service": years_of_service,
        "annual_bonus_days": annual_bonus_days,
        "vacation_premium_rate": vacation_premium_rate,
        "payroll_tax_rate": payroll_tax_rate,
    }


# --- Tools ---

@mcp.tool()
async def calculate_payroll(
    gross_pay: float = Field(description="Gross pay in MXN for one pay period"),
    pay_period: str = Field(default="monthly", description="'weekly', 'biweekly' or 'monthly'"),
    years_of_service: float = Field(default=1, description="Years of service"),
    annual_bonus_days: float = Field(default=15, description="Aguinaldo days"),
    vacation_premium_rate: float | None = Field(default=None, description="Prima vacacional as decimal"),
    payroll_tax_rate: float = Field(default=3, description="State payroll tax (ISN) percent"),
    tax_year: int | None = Field(default=None, description="Tax year (default: configured year)"),
) -> dict[str, Any]:
    """Calculate net pay, ISR, IMSS, aguinaldo, prima vacacional and employer cost for a Mexican salary."""
    try:
        compensation = validate_compensation(_compensation(
            gross_pay, pay_period, years_of_service, annual_bonus_days,
            vacation_premium_rate, payroll_tax_rate,
        ))
        rules = load_tax_rules(tax_year)
    except (InvalidCompensationError, SettingsError, TaxRulesNotFoundError, TaxRulesValidationError) as e:
        return {"error": str(e)}

    result = calculate(compensation, rules)
    period = compensation.pay_period
    return {
        "result": result.model_dump(),
        "per_period": period_values(result, period, rules.constants.days_per_month),
        "spreadsheet": to_clipboard_text(result, period, rules.constants.days_per_month),
    }


@mcp.tool()
async def get_vacation_days(
    years_of_service: float = Field(description="Years of service"),
    tax_year: int | None = Field(default=None, description="Tax year (default: configured year)"),
) -> dict[str, Any]:
    """Statutory vacation days for the given years of service."""
    try:
        rules = load_tax_rules(tax_year)
        days = vacation_days(years_of_service, rules.vacation_schedule)
    except (TaxRulesNotFoundError, TaxRulesValidationError, ValueError) as e:
        return {"error": str(e)}
    return {"tax_year": rules.year, "years_of_service": years_of_service, "vacation_days": days}


@mcp.tool()
async def advise_payroll(
    gross_pay: float = Field(description="Gross pay in MXN for one pay period"),
    pay_period: str = Field(default="monthly", description="'weekly', 'biweekly' or 'monthly'"),
    years_of_service: float = Field(default=1, description="Years of service"),
    annual_bonus_days: float = Field(default=15, description="Aguinaldo days"),
    vacation_premium_rate: float | None = Field(default=None, description="Prima vacacional as decimal"),
    payroll_tax_rate: float = Field(default=3, description="State payroll tax (ISN) percent"),
    tax_year: int | None = Field(default=None, description="Tax year (default: configured year)"),
) -> dict[str, Any]:
    """Get AI advice on whether a salary is competitive. Superseded requests return no advice."""
    try:
        compensation = validate_compensation(_compensation(
            gross_pay, pay_period, years_of_service, annual_bonus_days,
            vacation_premium_rate, payroll_tax_rate,
        ))
        rules = load_tax_rules(tax_year)
    except (InvalidCompensationError, SettingsError, TaxRulesNotFoundError, TaxRulesValidationError) as e:
        return {"error": str(e)}

    result = calculate(compensation, rules)
    advice = await _advisor.request(result, compensation.annual_bonus_days)
    if advice is None:
        return {"superseded": True, "advice": None}
    return {"superseded": False, "advice": advice}


# --- Resources ---

@mcp.resource("nominamx://tax-years")
async def list_years_resource() -> str:
    """List available tax years."""
    return json.dumps({"default": get_default_year(), "years": get_available_years()}, indent=2)


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
