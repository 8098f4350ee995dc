"""Safe Harbor SDK - Core functionality for estimated tax calculations."""

from .taxes import (
    FilingStatus,
    TaxYearRules,
    PaymentSchedule,
    SelfEmploymentTaxBreakdown,
    BracketDetail,
    IncomeTaxBreakdown,
    SafeHarborResult,
    DEFAULT_TAX_YEAR,
    get_available_years,
    load_tax_rules,
    load_payment_schedule,
    calculate_self_employment_tax,
    calculate_income_tax,
    calculate_safe_harbor,
)

from .schemas import (
    TaxInputs,
    TaxCalculationResult,
    CalculationStep,
    PenaltyComparison,
    QuarterlyPayment,
)

from .estimate import (
    calculate_taxes,
    explain_calculation,
    format_quarterly_division,
    compare_penalty_exposure,
)

from .formatting import (
    format_currency,
    format_percentage,
    parse_currency,
    round_to_dollar,
)

from .schedule import (
    build_payment_plan,
    render_voucher,
    render_vouchers,
    format_due_date,
)

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_data_path,
    InputStore,
    KEY_PREFIX,
)

__all__ = [
    # Tax rules
    "FilingStatus",
    "TaxYearRules",
    "PaymentSchedule",
    "DEFAULT_TAX_YEAR",
    "get_available_years",
    "load_tax_rules",
    "load_payment_schedule",
    # Calculators
    "SelfEmploymentTaxBreakdown",
    "BracketDetail",
    "IncomeTaxBreakdown",
    "SafeHarborResult",
    "calculate_self_employment_tax",
    "calculate_income_tax",
    "calculate_safe_harbor",
    # Estimate
    "TaxInputs",
    "TaxCalculationResult",
    "CalculationStep",
    "PenaltyComparison",
    "QuarterlyPayment",
    "calculate_taxes",
    "explain_calculation",
    "format_quarterly_division",
    "compare_penalty_exposure",
    # Formatting
    "format_currency",
    "format_percentage",
    "parse_currency",
    "round_to_dollar",
    # Schedule
    "build_payment_plan",
    "render_voucher",
    "render_vouchers",
    "format_due_date",
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_data_path",
    "InputStore",
    "KEY_PREFIX",
]
