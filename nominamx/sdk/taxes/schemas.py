"""Pydantic schemas for tax rules validation.

These schemas validate the tax_rules/*.yaml files and provide typed access
to yearly parameters like the ISR table, vacation schedule and IMSS rates.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TaxBracket(BaseModel):
    """Single row of the monthly ISR table."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_bound: float = Field(..., gt=0, description="Limite inferior (monthly gross)")
    base_amount: float = Field(..., ge=0, description="Cuota fija owed below this bracket")
    marginal_rate: float = Field(..., ge=0, le=100, description="Percent applied to the excess")


class VacationStep(BaseModel):
    """One step of the vacation schedule."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    up_to_years: Optional[int] = Field(
        default=None, ge=0, description="Last completed year covered (None for the open step)"
    )
    days: int = Field(..., gt=0, description="Vacation days granted")


class PayrollConstants(BaseModel):
    """Rates and reference values that change per tax year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    days_per_month: float = Field(default=30.4, gt=0, description="Average days per month")
    days_per_year: float = Field(default=365, gt=0)
    uma_daily: float = Field(..., gt=0, description="UMA daily value")
    uma_cap_multiplier: float = Field(default=25, gt=0, description="IMSS base cap in UMAs")
    imss_worker_rate: float = Field(..., ge=0, le=1, description="IMSS worker rate as decimal")
    imss_employer_rate: float = Field(..., ge=0, le=1, description="IMSS employer aggregate rate")
    infonavit_rate: float = Field(..., ge=0, le=1)
    vacation_premium_rate: float = Field(
        default=0.25, ge=0, le=1, description="Statutory minimum prima vacacional"
    )
    benefit_load_factor: float = Field(
        default=1.3, ge=1, description="Employer load applied to aguinaldo and prima"
    )
    minimum_wage_daily: Optional[float] = Field(default=None, gt=0)
    minimum_wage_border_daily: Optional[float] = Field(default=None, gt=0)


class TaxYearRules(BaseModel):
    """Complete payroll rules for a year."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields for forward compat

    year: int
    constants: PayrollConstants
    isr_monthly: list[TaxBracket] = Field(..., min_length=1)
    vacation_schedule: list[VacationStep] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_tables(self) -> "TaxYearRules":
        """Brackets must ascend and the schedule must be a closed step function."""
        bounds = [b.lower_bound for b in self.isr_monthly]
        if any(lo >= hi for lo, hi in zip(bounds, bounds[1:])):
            raise ValueError("isr_monthly lower bounds must be strictly ascending")

        steps = self.vacation_schedule
        if steps[-1].up_to_years is not None:
            raise ValueError("last vacation_schedule step must have up_to_years: null")
        if any(s.up_to_years is None for s in steps[:-1]):
            raise ValueError("only the last vacation_schedule step may be open-ended")
        limits = [s.up_to_years for s in steps[:-1]]
        if any(lo >= hi for lo, hi in zip(limits, limits[1:])):
            raise ValueError("vacation_schedule up_to_years must be strictly ascending")
        days = [s.days for s in steps]
        if any(lo > hi for lo, hi in zip(days, days[1:])):
            raise ValueError("vacation_schedule days must not decrease")
        return self
