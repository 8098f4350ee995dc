"""Tests for the estimated tax calculation.

Covers the end-to-end scenarios, the lesser-of rule, the walkthrough
and the penalty comparison.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from safeharbor.sdk import (
    FilingStatus,
    TaxInputs,
    calculate_taxes,
    compare_penalty_exposure,
    explain_calculation,
    format_quarterly_division,
    load_tax_rules,
)


@pytest.fixture
def rules():
    return load_tax_rules(2025)


def make_inputs(status="single", tax="25000", agi="140000", profit="200000") -> TaxInputs:
    return TaxInputs(
        filing_status=status,
        prior_year_tax=Decimal(tax),
        prior_year_agi=Decimal(agi),
        current_year_profit=Decimal(profit),
    )


class TestScenarios:

    def test_single_safe_harbor_is_lower(self, rules):
        """Single, $25k prior tax, $140k prior AGI, $200k profit."""
        result = calculate_taxes(make_inputs(), rules)

        assert result.tax_year == 2025
        assert result.safe_harbor_multiplier == Decimal("1.0")
        assert result.safe_harbor_minimum == Decimal("25000")
        assert result.self_employment_tax.total_se_tax == Decimal("27192.7")
        assert result.income_tax.taxable_income == Decimal("170653.65")
        assert result.income_tax.federal_income_tax == Decimal("33803.736")
        assert result.current_year_total_tax == Decimal("60996.436")
        assert result.current_year_avoidance_minimum == Decimal("54896.7924")
        assert result.required_annual_payment == Decimal("25000")
        assert result.quarterly_payment == Decimal("6250")
        assert result.is_current_year_lower is False
        assert result.savings == Decimal("29896.7924")
        assert result.recommended_method == "Safe Harbor"

    def test_married_high_income_multiplier(self, rules):
        """Prior AGI $151k is over the $150k threshold: 110%."""
        result = calculate_taxes(make_inputs(status="married", tax="30000", agi="151000"), rules)

        assert result.safe_harbor_multiplier == Decimal("1.1")
        assert result.safe_harbor_minimum == Decimal("33000")
        assert result.current_year_total_tax == Decimal("51099.383")
        assert result.current_year_avoidance_minimum == Decimal("45989.4447")
        assert result.required_annual_payment == Decimal("33000")
        assert result.quarterly_payment == Decimal("8250")

    def test_current_year_lower(self, rules):
        result = calculate_taxes(make_inputs(tax="100000", agi="100000"), rules)

        assert result.is_current_year_lower is True
        assert result.required_annual_payment == Decimal("54896.7924")
        assert result.quarterly_payment == Decimal("13724.1981")
        assert result.savings == Decimal("45103.2076")
        assert result.recommended_method == "Current Year Estimate"

    def test_tie_favors_safe_harbor(self, rules):
        result = calculate_taxes(make_inputs(tax="54896.7924"), rules)

        assert result.current_year_avoidance_minimum == result.safe_harbor_minimum
        assert result.is_current_year_lower is False
        assert result.savings == 0

    def test_zero_profit(self, rules):
        result = calculate_taxes(make_inputs(profit="0"), rules)

        se = result.self_employment_tax
        assert se.social_security_tax == se.medicare_tax == se.additional_medicare_tax == 0
        assert se.se_tax_deduction == 0
        assert result.income_tax.taxable_income == 0
        assert result.income_tax.bracket_details == ()
        assert result.income_tax.federal_income_tax == 0
        assert result.required_annual_payment == 0
        assert result.is_current_year_lower is True


class TestInvariants:

    @pytest.mark.parametrize("tax,agi,profit", [
        ("25000", "140000", "200000"),
        ("100000", "400000", "90000"),
        ("0", "0", "50000"),
        ("12345.67", "150000", "1234567.89"),
    ])
    def test_required_is_lesser(self, rules, tax, agi, profit):
        result = calculate_taxes(make_inputs(tax=tax, agi=agi, profit=profit), rules)

        assert result.required_annual_payment == min(
            result.safe_harbor_minimum, result.current_year_avoidance_minimum
        )
        assert result.quarterly_payment * 4 == result.required_annual_payment
        assert result.savings == abs(result.safe_harbor_minimum - result.current_year_avoidance_minimum)

    def test_idempotent(self, rules):
        first = calculate_taxes(make_inputs(), rules)
        second = calculate_taxes(make_inputs(), rules)

        assert first == second
        assert first.model_dump() == second.model_dump()
        assert first is not second

    def test_result_is_frozen(self, rules):
        result = calculate_taxes(make_inputs(), rules)

        with pytest.raises(ValidationError):
            result.quarterly_payment = Decimal("1")


class TestInputValidation:

    def test_negative_prior_year_tax_rejected(self):
        with pytest.raises(ValidationError):
            make_inputs(tax="-1")

    def test_negative_prior_year_agi_rejected(self):
        with pytest.raises(ValidationError):
            make_inputs(agi="-1")

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_rejected(self, value):
        with pytest.raises(ValidationError):
            make_inputs(profit=value)

    def test_unknown_filing_status_rejected(self):
        with pytest.raises(ValidationError):
            make_inputs(status="head_of_household")

    def test_negative_profit_allowed(self, rules):
        inputs = make_inputs(profit="-5000")
        result = calculate_taxes(inputs, rules)

        assert inputs.filing_status == FilingStatus.SINGLE
        assert result.income_tax.taxable_income == 0


class TestExplanation:

    def test_steps_reconstruct_figures(self, rules):
        result = calculate_taxes(make_inputs(), rules)
        steps = explain_calculation(result, rules)

        assert len(steps) == 7
        assert steps[0].calculation == "$200,000 × 92.35% = $184,700"
        assert steps[1].calculation == "$21,836 + $5,356 = $27,193"
        assert steps[2].calculation == "$200,000 − $13,596 − $15,750 = $170,654"
        assert steps[3].calculation == "Federal Income Tax = $33,804"
        assert steps[4].title == "Step 5: Total 2025 Projected Tax"
        assert steps[4].calculation == "$27,193 + $33,804 = $60,996"
        assert steps[5].calculation == "$25,000 × 100% = $25,000"
        assert "2024 AGI ($140,000) was $150,000 or less" in steps[5].description
        assert steps[6].calculation == "min($54,897, $25,000) = $25,000"
        assert format_quarterly_division(result) == "$25,000 ÷ 4 = $6,250 per quarter"

    def test_high_income_wording(self, rules):
        result = calculate_taxes(make_inputs(agi="151000"), rules)
        steps = explain_calculation(result, rules)

        assert "exceeded $150,000" in steps[5].description
        assert "110%" in steps[5].calculation

    def test_additional_medicare_shown_when_present(self, rules):
        result = calculate_taxes(make_inputs(profit="300000"), rules)
        steps = explain_calculation(result, rules)

        assert steps[1].calculation.count(" + ") == 2

    def test_no_brackets_wording(self, rules):
        result = calculate_taxes(make_inputs(profit="0"), rules)

        assert explain_calculation(result, rules)[3].description == "No taxable income"


class TestPenaltyComparison:

    def test_worst_case_and_penalty(self, rules):
        result = calculate_taxes(make_inputs(), rules)
        penalty = compare_penalty_exposure(result)

        assert penalty.worst_case_underpayment == Decimal("35996.436")
        assert abs(penalty.potential_penalty - Decimal("1439.85744")) < Decimal("0.0001")
        assert penalty.cash_flow_savings == Decimal("29896.7924")
        assert penalty.quarters_underpaid == 2

    def test_no_cash_flow_savings_when_current_year_lower(self, rules):
        result = calculate_taxes(make_inputs(tax="100000", agi="100000"), rules)
        penalty = compare_penalty_exposure(result)

        assert penalty.worst_case_underpayment == 0
        assert penalty.potential_penalty == 0
        assert penalty.cash_flow_savings == 0

    def test_none_without_prior_year_tax(self, rules):
        result = calculate_taxes(make_inputs(tax="0"), rules)

        assert compare_penalty_exposure(result) is None
