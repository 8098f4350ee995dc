"""Tests for tax rules loading and validation."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from safeharbor.sdk.taxes import (
    FilingStatus,
    FilingStatusRules,
    get_available_years,
    load_payment_schedule,
    load_tax_rules,
)


def bracket_table(*brackets):
    return {
        "standard_deduction": 15750,
        "additional_medicare_threshold": 200000,
        "tax_brackets": list(brackets),
    }


class TestLoadTaxRules:

    def test_2025_values(self):
        rules = load_tax_rules(2025)

        assert rules.year == 2025
        assert rules.single.standard_deduction == Decimal("15750")
        assert rules.married.standard_deduction == Decimal("31500")
        assert rules.single.additional_medicare_threshold == Decimal("200000")
        assert rules.married.additional_medicare_threshold == Decimal("250000")
        assert rules.self_employment.social_security_wage_base == Decimal("176100")
        assert rules.self_employment.social_security_rate == Decimal("0.124")
        assert rules.safe_harbor.high_income_agi_threshold == Decimal("150000")
        assert rules.safe_harbor.current_year_multiplier == Decimal("0.9")

    def test_for_status(self):
        rules = load_tax_rules(2025)

        assert rules.for_status(FilingStatus.MARRIED) is rules.married
        assert rules.for_status("single") is rules.single

    def test_cached_across_int_and_str(self):
        assert load_tax_rules(2025) is load_tax_rules("2025")

    def test_unknown_year(self):
        with pytest.raises(FileNotFoundError):
            load_tax_rules(1999)

    def test_available_years(self):
        assert 2025 in get_available_years()

    @pytest.mark.parametrize("status", ["single", "married"])
    def test_brackets_contiguous(self, status):
        brackets = load_tax_rules(2025).for_status(status).tax_brackets

        assert brackets[0].lower == 0
        assert brackets[-1].upper is None
        for prev, cur in zip(brackets, brackets[1:]):
            assert cur.lower == prev.upper + 1
            assert cur.rate > prev.rate

    def test_bracket_capacity(self):
        brackets = load_tax_rules(2025).single.tax_brackets

        assert brackets[0].capacity == Decimal("11926")
        assert brackets[-1].capacity is None


class TestBracketValidation:

    def test_valid_table(self):
        rules = FilingStatusRules.model_validate(bracket_table(
            {"lower": 0, "upper": 999, "rate": "0.1"},
            {"lower": 1000, "rate": "0.2"},
        ))
        assert len(rules.tax_brackets) == 2

    def test_gap_rejected(self):
        with pytest.raises(ValidationError, match="gap or overlap"):
            FilingStatusRules.model_validate(bracket_table(
                {"lower": 0, "upper": 999, "rate": "0.1"},
                {"lower": 1001, "rate": "0.2"},
            ))

    def test_rates_must_increase(self):
        with pytest.raises(ValidationError, match="does not increase"):
            FilingStatusRules.model_validate(bracket_table(
                {"lower": 0, "upper": 999, "rate": "0.2"},
                {"lower": 1000, "rate": "0.2"},
            ))

    def test_last_must_be_unbounded(self):
        with pytest.raises(ValidationError, match="last bracket must be unbounded"):
            FilingStatusRules.model_validate(bracket_table(
                {"lower": 0, "upper": 999, "rate": "0.1"},
            ))

    def test_must_start_at_zero(self):
        with pytest.raises(ValidationError, match="must start at 0"):
            FilingStatusRules.model_validate(bracket_table(
                {"lower": 1, "rate": "0.1"},
            ))

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            FilingStatusRules.model_validate(bracket_table(
                {"lower": 0, "rate": "0.1", "min": 0},
            ))


class TestPaymentSchedule:

    def test_2025_due_dates(self):
        schedule = load_payment_schedule(2025)

        assert schedule.year == 2025
        assert [q.quarter for q in schedule.quarters] == ["Q1", "Q2", "Q3", "Q4"]
        assert schedule.quarters[0].due == date(2025, 4, 15)
        assert schedule.quarters[1].due == date(2025, 6, 16)
        assert schedule.quarters[2].due == date(2025, 9, 15)
        assert schedule.quarters[3].due == date(2026, 1, 15)
