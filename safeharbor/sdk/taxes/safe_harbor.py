"""Prior-year Safe Harbor minimum (IRC 6654(d)(1)(B)-(C))."""

from decimal import Decimal

from .schemas import SafeHarborResult, TaxYearRules


def calculate_safe_harbor(
    prior_year_tax: Decimal,
    prior_year_agi: Decimal,
    rules: TaxYearRules,
) -> SafeHarborResult:
    """Minimum annual payment that avoids the underpayment penalty.

    High-income filers (prior AGI strictly above the threshold) must pay
    110% of last year's tax; everyone else pays 100%. AGI exactly at the
    threshold is not high income.
    """
    sh_rules = rules.safe_harbor
    is_high_income = prior_year_agi > sh_rules.high_income_agi_threshold
    multiplier = sh_rules.high_income_multiplier if is_high_income else sh_rules.standard_multiplier

    return SafeHarborResult(
        minimum=prior_year_tax * multiplier,
        multiplier_applied=multiplier,
        is_high_income=is_high_income,
    )
