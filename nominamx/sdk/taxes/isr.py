"""ISR monthly withholding using the progressive bracket table."""

from typing import Sequence

from .schemas import TaxBracket


def bracket_for(monthly_gross: float, brackets: Sequence[TaxBracket]) -> TaxBracket:
    """Select the bracket with the greatest lower bound not exceeding monthly_gross.

    Raises:
        ValueError: If monthly_gross is below the first bracket's lower bound.
    """
    selected = None
    for bracket in brackets:
        if bracket.lower_bound <= monthly_gross:
            selected = bracket
        else:
            break
    if selected is None:
        raise ValueError(
            f"Monthly gross {monthly_gross:.2f} is below the lowest ISR bracket"
        )
    return selected


def calc_isr(monthly_gross: float, brackets: Sequence[TaxBracket]) -> float:
    """Calculate monthly ISR: cuota fija plus the marginal rate over the excess.

    Returns 0.0 when the gross does not reach the first bracket.

    Example:
        5000 falls in the 746.05 row: 14.32 + (5000 - 746.05) * 6.40% = 286.5728
    """
    if not brackets or monthly_gross < brackets[0].lower_bound:
        return 0.0
    bracket = bracket_for(monthly_gross, brackets)
    excess = monthly_gross - bracket.lower_bound
    return bracket.base_amount + excess * (bracket.marginal_rate / 100)
