"""NominaMX SDK - Payroll engine, yearly rules and export helpers."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    coerce_setting,
    KNOWN_SETTINGS,
    SettingsError,
)

from .schemas import (
    PayPeriod,
    PAY_PERIODS,
    CompensationInput,
    EmployerCost,
    PayrollResult,
)

from .taxes import (
    TaxBracket,
    VacationStep,
    PayrollConstants,
    TaxYearRules,
    load_tax_rules,
    get_available_years,
    get_default_year,
    TaxRulesNotFoundError,
    TaxRulesValidationError,
    bracket_for,
    calc_isr,
    vacation_days,
)

from .payroll import (
    calculate,
    calculate_payroll,
    validate_compensation,
    normalize_to_monthly,
    period_divisor,
    effective_premium_rate,
    check_minimum_wage,
    InvalidCompensationError,
)

from .export import (
    format_currency,
    period_values,
    export_header,
    export_row,
    to_clipboard_text,
    breakdown,
    PERIOD_LABELS,
)

from .advisor import (
    build_advice_prompt,
    get_advice,
    AdvisorSession,
    FALLBACK_MESSAGE,
    EMPTY_MESSAGE,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "coerce_setting",
    "KNOWN_SETTINGS",
    "SettingsError",
    # Schemas
    "PayPeriod",
    "PAY_PERIODS",
    "CompensationInput",
    "EmployerCost",
    "PayrollResult",
    # Tax rules
    "TaxBracket",
    "VacationStep",
    "PayrollConstants",
    "TaxYearRules",
    "load_tax_rules",
    "get_available_years",
    "get_default_year",
    "TaxRulesNotFoundError",
    "TaxRulesValidationError",
    "bracket_for",
    "calc_isr",
    "vacation_days",
    # Engine
    "calculate",
    "calculate_payroll",
    "validate_compensation",
    "normalize_to_monthly",
    "period_divisor",
    "effective_premium_rate",
    "check_minimum_wage",
    "InvalidCompensationError",
    # Export
    "format_currency",
    "period_values",
    "export_header",
    "export_row",
    "to_clipboard_text",
    "breakdown",
    "PERIOD_LABELS",
    # Advisor
    "build_advice_prompt",
    "get_advice",
    "AdvisorSession",
    "FALLBACK_MESSAGE",
    "EMPTY_MESSAGE",
]
