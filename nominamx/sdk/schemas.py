"""Pydantic schemas for payroll inputs and results.

Inputs use extra='forbid' so a misspelled field is a clear error rather
than a silently ignored value. All records are frozen value objects.
"""

from typing import Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field


PayPeriod = Literal["weekly", "biweekly", "monthly"]
PAY_PERIODS = get_args(PayPeriod)


class CompensationInput(BaseModel):
    """Compensation for a single employee, as entered by the user."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_pay: float = Field(
        ..., gt=0, allow_inf_nan=False,
        description="Gross pay stated in the unit of pay_period",
    )
    pay_period: PayPeriod = Field(default="monthly", description="Period gross_pay refers to")
    years_of_service: float = Field(
        default=1, ge=0, allow_inf_nan=False,
        description="Years of service; floored to completed years for the vacation lookup",
    )
    annual_bonus_days: float = Field(
        default=15, ge=0, allow_inf_nan=False,
        description="Aguinaldo days paid at year end (15 is the legal minimum)",
    )
    vacation_premium_rate: Optional[float] = Field(
        default=None, ge=0, le=1,
        description=(
            "Prima vacacional as a decimal. The statutory minimum of the tax "
            "year applies when this is lower or unset."
        ),
    )
    payroll_tax_rate: float = Field(
        default=3, ge=0, allow_inf_nan=False,
        description="State payroll tax (ISN) in percent, e.g. 3 for 3%",
    )


class EmployerCost(BaseModel):
    """Monthly employer contributions and cost totals."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    imss_employer: float = Field(..., description="IMSS employer contribution (monthly)")
    infonavit: float = Field(..., description="INFONAVIT housing fund (monthly)")
    isn: float = Field(..., description="State payroll tax (monthly)")
    total_monthly: float = Field(..., description="Gross plus all employer contributions")
    total_annual: float = Field(
        ..., description="Twelve months of cost plus loaded aguinaldo and prima vacacional"
    )


class PayrollResult(BaseModel):
    """Full monthly and annual breakdown for one compensation input.

    Net figures are never clamped: a negative net signals withholdings that
    exceed gross.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: int
    gross_monthly: float
    gross_annual: float
    net_monthly: float
    net_annual: float
    isr: float = Field(..., description="Monthly ISR withholding")
    imss_worker: float = Field(..., description="Monthly IMSS worker contribution")
    aguinaldo: float = Field(..., description="Annual year-end bonus")
    vacation_premium: float = Field(..., description="Annual prima vacacional")
    vacation_days: int
    daily_salary: float
    integration_factor: float
    sbc: float = Field(..., description="Salario base de cotizacion (daily)")
    employer_cost: EmployerCost
