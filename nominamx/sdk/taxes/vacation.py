"""Statutory vacation days by years of service."""

import math
from typing import Sequence

from .schemas import VacationStep


def completed_years(years: float) -> int:
    """Floor years of service to whole completed years.

    Raises:
        ValueError: If years is negative.
    """
    if years < 0:
        raise ValueError(f"Years of service cannot be negative: {years}")
    return int(math.floor(years))


def vacation_days(years: float, schedule: Sequence[VacationStep]) -> int:
    """Look up vacation days for the given years of service.

    Fractional years are floored (2.9 years counts as 2).
    """
    whole_years = completed_years(years)
    for step in schedule:
        if step.up_to_years is None or whole_years <= step.up_to_years:
            return step.days
    return schedule[-1].days
