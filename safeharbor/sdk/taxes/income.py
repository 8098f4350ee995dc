"""Federal income tax from the progressive bracket tables."""

from decimal import Decimal

from .schemas import BracketDetail, FilingStatus, IncomeTaxBreakdown, TaxBracket, TaxYearRules


def calculate_federal_income_tax(
    taxable_income: Decimal,
    tax_brackets: tuple[TaxBracket, ...],
) -> tuple[Decimal, list[BracketDetail]]:
    """Walk the brackets from the bottom, filling each before the next.

    Returns:
        Tuple of (total tax, per-bracket details). Details only include
        brackets that received income, in ascending rate order.
    """
    remaining = taxable_income
    tax_owed = Decimal(0)
    details = []

    for bracket in tax_brackets:
        if remaining <= 0:
            break

        capacity = bracket.capacity
        taxable_at_rate = remaining if capacity is None else min(remaining, capacity)
        tax_at_rate = taxable_at_rate * bracket.rate

        if taxable_at_rate > 0:
            details.append(BracketDetail(
                rate=bracket.rate,
                taxable_at_rate=taxable_at_rate,
                tax_at_rate=tax_at_rate,
            ))

        tax_owed += tax_at_rate
        remaining -= taxable_at_rate

    return tax_owed, details


def calculate_income_tax(
    net_profit: Decimal,
    se_tax_deduction: Decimal,
    filing_status: FilingStatus,
    rules: TaxYearRules,
) -> IncomeTaxBreakdown:
    """Calculate federal income tax on self-employment profit.

    AGI is net profit less the deductible half of SE tax; taxable income
    is AGI less the standard deduction, floored at zero.
    """
    status_rules = rules.for_status(filing_status)

    agi = net_profit - se_tax_deduction
    taxable_income = max(Decimal(0), agi - status_rules.standard_deduction)

    federal_income_tax, details = calculate_federal_income_tax(
        taxable_income, status_rules.tax_brackets
    )

    return IncomeTaxBreakdown(
        adjusted_gross_income=agi,
        standard_deduction=status_rules.standard_deduction,
        taxable_income=taxable_income,
        federal_income_tax=federal_income_tax,
        bracket_details=tuple(details),
    )
