"""taxes - Yearly rules and the lookups built on them.

Scope:
- ISR monthly bracket table (cuota fija + marginal rate)
- Vacation schedule by completed years of service
- IMSS / INFONAVIT rates and UMA reference value

Constraints:
- Pure lookups - no payroll assembly (that's in payroll.py)
- Year-specific rules loaded from tax_rules/{year}.yaml

Usage:
    from nominamx.sdk.taxes import load_tax_rules, calc_isr, vacation_days

    rules = load_tax_rules(2024)
    isr = calc_isr(5000, rules.isr_monthly)
    days = vacation_days(3, rules.vacation_schedule)
"""

from .schemas import (
    TaxBracket,
    VacationStep,
    PayrollConstants,
    TaxYearRules,
)

from .rules import (
    load_tax_rules,
    get_available_years,
    get_default_year,
    TaxRulesNotFoundError,
    TaxRulesValidationError,
    DEFAULT_TAX_YEAR,
)

from .isr import bracket_for, calc_isr
from .vacation import vacation_days, completed_years

__all__ = [
    # Schemas
    "TaxBracket",
    "VacationStep",
    "PayrollConstants",
    "TaxYearRules",
    # Rules
    "load_tax_rules",
    "get_available_years",
    "get_default_year",
    "TaxRulesNotFoundError",
    "TaxRulesValidationError",
    "DEFAULT_TAX_YEAR",
    # Lookups
    "bracket_for",
    "calc_isr",
    "vacation_days",
    "completed_years",
]
