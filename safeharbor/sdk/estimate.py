"""Estimated tax calculation: the lesser of Safe Harbor and 90% of current year.

Composes the calculators in safeharbor.sdk.taxes into one result, and
builds the walkthrough and penalty comparison shown alongside it.
"""

import logging
from decimal import Decimal
from typing import Optional, Union

from .formatting import format_currency, format_percentage
from .schemas import CalculationStep, PenaltyComparison, TaxCalculationResult, TaxInputs
from .taxes import (
    SE_EARNINGS_FACTOR,
    TaxYearRules,
    calculate_income_tax,
    calculate_safe_harbor,
    calculate_self_employment_tax,
)

logger = logging.getLogger(__name__)

QUARTERS_PER_YEAR = 4

# Rough IRS underpayment interest for the penalty comparison
DEFAULT_UNDERPAYMENT_RATE = Decimal("0.08")
DEFAULT_QUARTERS_UNDERPAID = 2


def calculate_taxes(inputs: TaxInputs, rules: TaxYearRules) -> TaxCalculationResult:
    """Calculate the required estimated tax payment.

    Runs SE tax, then income tax using the SE deduction, then the prior-year
    Safe Harbor, and takes the lesser of the Safe Harbor minimum and 90%
    of projected current-year tax. Every call is independent: identical
    inputs and rules give identical results.

    Args:
        inputs: Filing status and the three dollar figures
        rules: Tax year parameters

    Returns:
        TaxCalculationResult with all intermediate figures
    """
    status = inputs.filing_status
    profit = inputs.current_year_profit

    self_employment_tax = calculate_self_employment_tax(profit, status, rules)
    logger.debug(
        f"SE tax: {self_employment_tax.social_security_tax} ss + {self_employment_tax.medicare_tax} medicare"
        f" + {self_employment_tax.additional_medicare_tax} additional = {self_employment_tax.total_se_tax}"
    )

    income_tax = calculate_income_tax(profit, self_employment_tax.se_tax_deduction, status, rules)
    logger.debug(
        f"income tax: {income_tax.federal_income_tax} on taxable {income_tax.taxable_income}"
        f" across {len(income_tax.bracket_details)} bracket(s)"
    )

    current_year_total_tax = self_employment_tax.total_se_tax + income_tax.federal_income_tax
    current_year_avoidance_minimum = current_year_total_tax * rules.safe_harbor.current_year_multiplier

    safe_harbor = calculate_safe_harbor(inputs.prior_year_tax, inputs.prior_year_agi, rules)
    logger.debug(
        f"safe harbor: {inputs.prior_year_tax} x {safe_harbor.multiplier_applied} = {safe_harbor.minimum}"
    )

    # Required payment is the LESSER of the two
    required_annual_payment = min(safe_harbor.minimum, current_year_avoidance_minimum)
    quarterly_payment = required_annual_payment / QUARTERS_PER_YEAR

    # Ties favor Safe Harbor
    is_current_year_lower = current_year_avoidance_minimum < safe_harbor.minimum
    savings = abs(safe_harbor.minimum - current_year_avoidance_minimum)

    logger.debug(
        f"required: min({safe_harbor.minimum}, {current_year_avoidance_minimum}) = {required_annual_payment}"
    )

    return TaxCalculationResult(
        tax_year=rules.year,
        inputs=inputs,
        self_employment_tax=self_employment_tax,
        income_tax=income_tax,
        current_year_total_tax=current_year_total_tax,
        current_year_avoidance_minimum=current_year_avoidance_minimum,
        safe_harbor_multiplier=safe_harbor.multiplier_applied,
        safe_harbor_minimum=safe_harbor.minimum,
        required_annual_payment=required_annual_payment,
        quarterly_payment=quarterly_payment,
        is_current_year_lower=is_current_year_lower,
        savings=savings,
    )


def explain_calculation(result: TaxCalculationResult, rules: TaxYearRules) -> list[CalculationStep]:
    """Build the step-by-step walkthrough of a result.

    Every figure comes from the result itself, so the walkthrough always
    matches what was calculated.
    """
    inputs = result.inputs
    se = result.self_employment_tax
    income = result.income_tax
    year = result.tax_year
    threshold = rules.safe_harbor.high_income_agi_threshold
    is_high_income = inputs.prior_year_agi > threshold
    se_factor = f"{SE_EARNINGS_FACTOR * 100:.2f}%"

    se_parts = [format_currency(se.social_security_tax), format_currency(se.medicare_tax)]
    if se.additional_medicare_tax > 0:
        se_parts.append(format_currency(se.additional_medicare_tax))

    if is_high_income:
        agi_description = (
            f"Since your {year - 1} AGI ({format_currency(inputs.prior_year_agi)}) exceeded "
            f"{format_currency(threshold)}, you must pay "
            f"{format_percentage(result.safe_harbor_multiplier)} of last year's tax."
        )
    else:
        agi_description = (
            f"Since your {year - 1} AGI ({format_currency(inputs.prior_year_agi)}) was "
            f"{format_currency(threshold)} or less, you pay "
            f"{format_percentage(result.safe_harbor_multiplier)} of last year's tax."
        )

    brackets = ", ".join(
        f"{format_percentage(d.rate)} on {format_currency(d.taxable_at_rate)}"
        for d in income.bracket_details
    ) or "No taxable income"

    return [
        CalculationStep(
            title="Step 1: Calculate SE Taxable Earnings",
            description=f"Self-employment tax applies to {se_factor} of net profit.",
            calculation=f"{format_currency(inputs.current_year_profit)} × {se_factor} = "
                        f"{format_currency(se.se_taxable_earnings)}",
        ),
        CalculationStep(
            title="Step 2: Calculate Self-Employment Tax",
            description="Social Security (up to the wage base) plus Medicare, "
                        "plus Additional Medicare over the threshold.",
            calculation=f"{' + '.join(se_parts)} = {format_currency(se.total_se_tax)}",
        ),
        CalculationStep(
            title="Step 3: Calculate Taxable Income",
            description=f"Net profit minus half of SE tax minus standard deduction "
                        f"({format_currency(income.standard_deduction)}).",
            calculation=f"{format_currency(inputs.current_year_profit)} − "
                        f"{format_currency(se.se_tax_deduction)} − "
                        f"{format_currency(income.standard_deduction)} = "
                        f"{format_currency(income.taxable_income)}",
        ),
        CalculationStep(
            title="Step 4: Apply Tax Brackets",
            description=brackets,
            calculation=f"Federal Income Tax = {format_currency(income.federal_income_tax)}",
        ),
        CalculationStep(
            title=f"Step 5: Total {year} Projected Tax",
            description="Self-employment tax plus federal income tax.",
            calculation=f"{format_currency(se.total_se_tax)} + "
                        f"{format_currency(income.federal_income_tax)} = "
                        f"{format_currency(result.current_year_total_tax)}",
        ),
        CalculationStep(
            title="Step 6: Calculate Safe Harbor Minimum",
            description=agi_description,
            calculation=f"{format_currency(inputs.prior_year_tax)} × "
                        f"{format_percentage(result.safe_harbor_multiplier)} = "
                        f"{format_currency(result.safe_harbor_minimum)}",
        ),
        CalculationStep(
            title="Step 7: Determine Required Payment",
            description=f"Pay the lesser of {format_percentage(rules.safe_harbor.current_year_multiplier)} "
                        f"of projected tax and the Safe Harbor minimum.",
            calculation=f"min({format_currency(result.current_year_avoidance_minimum)}, "
                        f"{format_currency(result.safe_harbor_minimum)}) = "
                        f"{format_currency(result.required_annual_payment)}",
        ),
    ]


def format_quarterly_division(result: TaxCalculationResult) -> str:
    """The closing line of the walkthrough."""
    return (
        f"{format_currency(result.required_annual_payment)} ÷ {QUARTERS_PER_YEAR} = "
        f"{format_currency(result.quarterly_payment)} per quarter"
    )


def compare_penalty_exposure(
    result: TaxCalculationResult,
    interest_rate: Union[Decimal, str] = DEFAULT_UNDERPAYMENT_RATE,
    quarters_underpaid: int = DEFAULT_QUARTERS_UNDERPAID,
) -> Optional[PenaltyComparison]:
    """Estimate what paying below Safe Harbor could cost.

    The penalty is simple interest on the worst-case underpayment for the
    average number of months it stays unpaid. Returns None when there was
    no prior-year tax, since the Safe Harbor minimum is then zero.
    """
    if result.inputs.prior_year_tax == 0:
        return None

    rate = Decimal(str(interest_rate))
    worst_case_underpayment = max(Decimal(0), result.current_year_total_tax - result.safe_harbor_minimum)
    months_unpaid = quarters_underpaid * 3
    potential_penalty = worst_case_underpayment * (rate / 12) * months_unpaid

    difference = result.current_year_avoidance_minimum - result.safe_harbor_minimum
    cash_flow_savings = difference if difference > 0 else Decimal(0)

    return PenaltyComparison(
        worst_case_underpayment=worst_case_underpayment,
        potential_penalty=potential_penalty,
        cash_flow_savings=cash_flow_savings,
        interest_rate=rate,
        quarters_underpaid=quarters_underpaid,
    )
