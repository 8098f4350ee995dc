"""taxes - Tax-law calculators for self-employed estimated tax.

Scope:
- Self-employment tax (Schedule SE)
- Progressive federal income tax
- Prior-year Safe Harbor minimum

Constraints:
- Pure calculation - no I/O, no settings, no stored inputs
- Every calculator receives the year's TaxYearRules explicitly
- Year-specific rules loaded from safeharbor/tax_rules/{year}.yaml

Usage:
    from safeharbor.sdk.taxes import load_tax_rules, calculate_self_employment_tax

    rules = load_tax_rules(2025)
    se = calculate_self_employment_tax(Decimal("200000"), FilingStatus.SINGLE, rules)
"""

from .schemas import (
    FilingStatus,
    TaxBracket,
    FilingStatusRules,
    SelfEmploymentRules,
    SafeHarborRules,
    TaxYearRules,
    PaymentDueDate,
    PaymentSchedule,
    SelfEmploymentTaxBreakdown,
    BracketDetail,
    IncomeTaxBreakdown,
    SafeHarborResult,
)

from .rules import (
    DEFAULT_TAX_YEAR,
    get_available_years,
    load_tax_rules,
    load_payment_schedule,
)

from .self_employment import SE_EARNINGS_FACTOR, calculate_self_employment_tax
from .income import calculate_income_tax, calculate_federal_income_tax
from .safe_harbor import calculate_safe_harbor

__all__ = [
    # Schemas
    "FilingStatus",
    "TaxBracket",
    "FilingStatusRules",
    "SelfEmploymentRules",
    "SafeHarborRules",
    "TaxYearRules",
    "PaymentDueDate",
    "PaymentSchedule",
    "SelfEmploymentTaxBreakdown",
    "BracketDetail",
    "IncomeTaxBreakdown",
    "SafeHarborResult",
    # Rules
    "DEFAULT_TAX_YEAR",
    "get_available_years",
    "load_tax_rules",
    "load_payment_schedule",
    # Calculators
    "SE_EARNINGS_FACTOR",
    "calculate_self_employment_tax",
    "calculate_income_tax",
    "calculate_federal_income_tax",
    "calculate_safe_harbor",
]
