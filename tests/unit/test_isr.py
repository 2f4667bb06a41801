"""Tests for ISR bracket lookup and monthly withholding."""

import pytest

from nominamx.sdk.taxes import bracket_for, calc_isr


class TestBracketFor:

    @pytest.mark.parametrize("gross,expected_lower", [
        (0.01, 0.01),
        (746.04, 0.01),
        (746.05, 746.05),
        (5000, 746.05),
        (6332.06, 6332.06),
        (11128.01, 6332.06),
        (20000, 15487.72),
        (100000, 93993.91),
        (375976.30, 375976.30),
        (1_000_000, 375976.30),
    ])
    def test_greatest_lower_bound(self, rules_2024, gross, expected_lower):
        assert bracket_for(gross, rules_2024.isr_monthly).lower_bound == expected_lower

    def test_monotonic(self, rules_2024):
        """Increasing gross never selects a lower bracket."""
        previous = 0.0
        gross = 0.01
        while gross < 500_000:
            lower = bracket_for(gross, rules_2024.isr_monthly).lower_bound
            assert lower >= previous
            previous = lower
            gross = gross * 1.07 + 13

    def test_below_first_bracket_raises(self, rules_2024):
        with pytest.raises(ValueError, match="below the lowest"):
            bracket_for(0, rules_2024.isr_monthly)


class TestCalcIsr:

    def test_5000_monthly(self, rules_2024):
        # 14.32 + (5000 - 746.05) * 6.40%
        assert calc_isr(5000, rules_2024.isr_monthly) == pytest.approx(286.5728)

    def test_exact_lower_bound_is_base_amount(self, rules_2024):
        assert calc_isr(746.05, rules_2024.isr_monthly) == pytest.approx(14.32)
        assert calc_isr(12935.83, rules_2024.isr_monthly) == pytest.approx(1182.88)

    def test_first_bracket(self, rules_2024):
        assert calc_isr(500, rules_2024.isr_monthly) == pytest.approx((500 - 0.01) * 0.0192)

    def test_high_income(self, rules_2024):
        assert calc_isr(100000, rules_2024.isr_monthly) == pytest.approx(22665.17 + 6006.09 * 0.32)

    def test_zero_gross_is_zero(self, rules_2024):
        assert calc_isr(0, rules_2024.isr_monthly) == 0.0
        assert calc_isr(-100, rules_2024.isr_monthly) == 0.0

    def test_non_decreasing(self, rules_2024):
        amounts = [calc_isr(g, rules_2024.isr_monthly) for g in range(1, 400_000, 997)]
        assert all(a <= b for a, b in zip(amounts, amounts[1:]))
