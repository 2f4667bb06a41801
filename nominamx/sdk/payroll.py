"""
Payroll calculation engine.

Maps one CompensationInput plus one year of TaxYearRules to a PayrollResult.
The calculation is pure: no I/O beyond loading the default rules when none
are passed, and no shared state, so it is safe to call from any thread.

Calculation chain (all constants come from TaxYearRules.constants)
------------------------------------------------------------------

    monthly gross     weekly: gross / 7 * days_per_month
                      biweekly: gross * 2
                      monthly: gross
    daily salary      monthly gross / days_per_month
    aguinaldo         daily salary * bonus days
    prima vacacional  daily salary * vacation days * premium rate
    integration       (days_per_year + bonus days + vacation days * premium rate)
                      / days_per_year
    SBC               daily salary * integration factor
    ISR               cuota fija + excess over lower bound * marginal rate
    IMSS worker       SBC * days_per_month * worker rate, capped as if SBC were
                      uma_cap_multiplier UMAs
    IMSS employer     SBC * days_per_month * employer rate
    INFONAVIT         SBC * days_per_month * infonavit rate
    ISN               monthly gross * payroll tax percent / 100
    annual cost       total monthly * 12 + (aguinaldo + prima) * load factor

The engine does not validate; validate_compensation() is the boundary check
and calculate_payroll() runs both.
"""

import logging
import os
from typing import Any, Optional

from pydantic import ValidationError

from .schemas import CompensationInput, EmployerCost, PayrollResult, PayPeriod
from .taxes import TaxYearRules, calc_isr, load_tax_rules, vacation_days

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)


class InvalidCompensationError(ValueError):
    """Raised when compensation inputs fail validation."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []


def validate_compensation(data: Any) -> CompensationInput:
    """Validate raw compensation data into a CompensationInput.

    Args:
        data: A CompensationInput (returned as is) or a mapping of fields

    Returns:
        Validated CompensationInput

    Raises:
        InvalidCompensationError: On non-positive gross, an unknown pay period,
            negative years of service or any other malformed field
    """
    if isinstance(data, CompensationInput):
        return data
    try:
        return CompensationInput.model_validate(data)
    except ValidationError as e:
        messages = []
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"]) or "input"
            messages.append(f"{field}: {err['msg']}")
        raise InvalidCompensationError(
            "Invalid compensation input: " + "; ".join(messages),
            errors=messages,
        ) from e


def period_divisor(period: PayPeriod, days_per_month: float) -> float:
    """Number of pay periods of this kind in one month of days_per_month days."""
    if period == "weekly":
        return days_per_month / 7
    if period == "biweekly":
        return 2
    return 1


def normalize_to_monthly(gross_pay: float, period: PayPeriod, days_per_month: float) -> float:
    """Convert gross pay for a period to monthly gross.

    Example:
        normalize_to_monthly(1000, "weekly", 30.4) -> 1000 / 7 * 30.4 = 4342.857...
    """
    if period == "weekly":
        return gross_pay / 7 * days_per_month
    if period == "biweekly":
        return gross_pay * 2
    return gross_pay


def effective_premium_rate(compensation: CompensationInput, rules: TaxYearRules) -> float:
    """Prima vacacional rate actually paid.

    The statutory rate is a floor; a configured rate above it is honored.
    """
    statutory = rules.constants.vacation_premium_rate
    configured = compensation.vacation_premium_rate
    if configured is None:
        return statutory
    return max(configured, statutory)


def check_minimum_wage(daily_salary: float, rules: TaxYearRules, border_zone: bool = False) -> bool:
    """Check a daily salary against the year's minimum wage.

    Returns True when the salary reaches the minimum or when the rules don't
    define one.
    """
    c = rules.constants
    minimum = c.minimum_wage_border_daily if border_zone else c.minimum_wage_daily
    if minimum is None:
        return True
    return daily_salary >= minimum


def calculate(compensation: CompensationInput, rules: Optional[TaxYearRules] = None) -> PayrollResult:
    """Calculate the full worker and employer breakdown.

    Args:
        compensation: Validated compensation inputs
        rules: Tax year rules; defaults to the configured tax year

    Returns:
        PayrollResult with monthly and annual figures
    """
    if rules is None:
        rules = load_tax_rules()
    c = rules.constants

    monthly_gross = normalize_to_monthly(
        compensation.gross_pay, compensation.pay_period, c.days_per_month
    )
    daily_salary = monthly_gross / c.days_per_month
    annual_gross = monthly_gross * 12

    # Aguinaldo and prima vacacional
    bonus_days = compensation.annual_bonus_days
    vac_days = vacation_days(compensation.years_of_service, rules.vacation_schedule)
    premium_rate = effective_premium_rate(compensation, rules)
    aguinaldo = daily_salary * bonus_days
    vacation_premium = daily_salary * vac_days * premium_rate

    # SBC for IMSS
    integration_factor = (c.days_per_year + bonus_days + vac_days * premium_rate) / c.days_per_year
    sbc = daily_salary * integration_factor
    monthly_sbc = sbc * c.days_per_month

    isr = calc_isr(monthly_gross, rules.isr_monthly)

    imss_cap = (c.uma_cap_multiplier * c.uma_daily) * c.days_per_month * c.imss_worker_rate
    imss_worker = min(monthly_sbc * c.imss_worker_rate, imss_cap)

    net_monthly = monthly_gross - isr - imss_worker
    net_annual = net_monthly * 12 + aguinaldo + vacation_premium

    imss_employer = monthly_sbc * c.imss_employer_rate
    infonavit = monthly_sbc * c.infonavit_rate
    isn = monthly_gross * (compensation.payroll_tax_rate / 100)

    total_monthly = monthly_gross + imss_employer + infonavit + isn
    total_annual = (
        total_monthly * 12
        + aguinaldo * c.benefit_load_factor
        + vacation_premium * c.benefit_load_factor
    )

    logger.debug(
        f"payroll {rules.year}: monthly={monthly_gross:.2f} daily={daily_salary:.4f} "
        f"vac_days={vac_days} factor={integration_factor:.6f} sbc={sbc:.4f} "
        f"isr={isr:.2f} imss={imss_worker:.2f} net={net_monthly:.2f}"
    )
    if net_monthly < 0:
        logger.warning(f"Withholdings exceed gross: net monthly is {net_monthly:.2f}")

    return PayrollResult(
        tax_year=rules.year,
        gross_monthly=monthly_gross,
        gross_annual=annual_gross,
        net_monthly=net_monthly,
        net_annual=net_annual,
        isr=isr,
        imss_worker=imss_worker,
        aguinaldo=aguinaldo,
        vacation_premium=vacation_premium,
        vacation_days=vac_days,
        daily_salary=daily_salary,
        integration_factor=integration_factor,
        sbc=sbc,
        employer_cost=EmployerCost(
            imss_employer=imss_employer,
            infonavit=infonavit,
            isn=isn,
            total_monthly=total_monthly,
            total_annual=total_annual,
        ),
    )


def calculate_payroll(rules: Optional[TaxYearRules] = None, **fields) -> PayrollResult:
    """Validate keyword inputs and calculate.

    Example:
        calculate_payroll(gross_pay=5000, pay_period="monthly", years_of_service=1)

    Raises:
        InvalidCompensationError: If the inputs fail validation
    """
    return calculate(validate_compensation(fields), rules)
