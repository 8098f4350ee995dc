"""Self-employment tax (Schedule SE).

SE tax replaces payroll FICA for the self-employed: the filer pays both
the employee and employer halves of Social Security and Medicare on
92.35% of net profit, plus Additional Medicare Tax over the threshold.
"""

from decimal import Decimal

from .schemas import FilingStatus, SelfEmploymentTaxBreakdown, TaxYearRules

# Net earnings factor (Schedule SE line 4a). Statutory, not a yearly parameter.
SE_EARNINGS_FACTOR = Decimal("0.9235")


def calculate_self_employment_tax(
    net_profit: Decimal,
    filing_status: FilingStatus,
    rules: TaxYearRules,
) -> SelfEmploymentTaxBreakdown:
    """Calculate SE tax from Schedule C net profit.

    No validation is done here: a negative profit flows through as
    negative Social Security and Medicare components.

    Args:
        net_profit: Current-year net profit
        filing_status: Selects the Additional Medicare threshold
        rules: Tax year parameters

    Returns:
        SelfEmploymentTaxBreakdown with components, total and deduction
    """
    se_rules = rules.self_employment
    threshold = rules.for_status(filing_status).additional_medicare_threshold

    se_taxable_earnings = net_profit * SE_EARNINGS_FACTOR

    # Social Security stops at the wage base
    ss_taxable = min(se_taxable_earnings, se_rules.social_security_wage_base)
    social_security_tax = ss_taxable * se_rules.social_security_rate

    # Medicare has no cap
    medicare_tax = se_taxable_earnings * se_rules.medicare_rate

    # Additional Medicare applies to the excess only
    additional_taxable = max(Decimal(0), se_taxable_earnings - threshold)
    additional_medicare_tax = additional_taxable * se_rules.additional_medicare_rate

    total_se_tax = social_security_tax + medicare_tax + additional_medicare_tax

    return SelfEmploymentTaxBreakdown(
        se_taxable_earnings=se_taxable_earnings,
        social_security_tax=social_security_tax,
        medicare_tax=medicare_tax,
        additional_medicare_tax=additional_medicare_tax,
        total_se_tax=total_se_tax,
        se_tax_deduction=total_se_tax * se_rules.deduction_fraction,
    )
