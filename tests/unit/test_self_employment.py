"""Unit tests for self-employment tax (Schedule SE)."""

from decimal import Decimal

import pytest

from safeharbor.sdk.taxes import FilingStatus, calculate_self_employment_tax, load_tax_rules


@pytest.fixture
def rules():
    return load_tax_rules(2025)


class TestComponents:
    """SS, Medicare and Additional Medicare on 92.35% of profit."""

    def test_single_200k_profit(self, rules):
        """$200,000 profit: SS capped at the wage base, no Additional Medicare."""
        se = calculate_self_employment_tax(Decimal("200000"), FilingStatus.SINGLE, rules)

        assert se.se_taxable_earnings == Decimal("184700")
        assert se.social_security_tax == Decimal("21836.4")
        assert se.medicare_tax == Decimal("5356.3")
        assert se.additional_medicare_tax == 0
        assert se.total_se_tax == Decimal("27192.7")
        assert se.se_tax_deduction == Decimal("13596.35")

    def test_below_wage_base(self, rules):
        """$50,000 profit: everything is below the SS wage base."""
        se = calculate_self_employment_tax(Decimal("50000"), FilingStatus.SINGLE, rules)

        assert se.se_taxable_earnings == Decimal("46175")
        assert se.social_security_tax == Decimal("46175") * Decimal("0.124")
        assert se.medicare_tax == Decimal("46175") * Decimal("0.029")

    def test_zero_profit(self, rules):
        se = calculate_self_employment_tax(Decimal("0"), FilingStatus.MARRIED, rules)

        assert se.social_security_tax == 0
        assert se.medicare_tax == 0
        assert se.additional_medicare_tax == 0
        assert se.total_se_tax == 0
        assert se.se_tax_deduction == 0

    @pytest.mark.parametrize("status", [FilingStatus.SINGLE, FilingStatus.MARRIED])
    @pytest.mark.parametrize("profit", ["1", "75000", "216500", "400000", "2500000"])
    def test_total_is_exact_sum(self, rules, status, profit):
        se = calculate_self_employment_tax(Decimal(profit), status, rules)

        assert se.social_security_tax >= 0
        assert se.medicare_tax >= 0
        assert se.additional_medicare_tax >= 0
        assert se.total_se_tax == se.social_security_tax + se.medicare_tax + se.additional_medicare_tax
        assert se.se_tax_deduction == se.total_se_tax * Decimal("0.5")

    def test_negative_profit_flows_through(self, rules):
        """No validation at this layer: a loss gives negative SS and Medicare."""
        se = calculate_self_employment_tax(Decimal("-10000"), FilingStatus.SINGLE, rules)

        assert se.social_security_tax < 0
        assert se.medicare_tax < 0
        assert se.additional_medicare_tax == 0


class TestWageBaseCap:
    """Social Security never exceeds wage base x rate."""

    @pytest.mark.parametrize("profit", ["190700", "500000", "10000000"])
    def test_social_security_capped(self, rules, profit):
        se = calculate_self_employment_tax(Decimal(profit), FilingStatus.SINGLE, rules)
        cap = rules.self_employment.social_security_wage_base * rules.self_employment.social_security_rate

        assert se.social_security_tax == cap == Decimal("21836.4")

    def test_medicare_uncapped(self, rules):
        se = calculate_self_employment_tax(Decimal("10000000"), FilingStatus.SINGLE, rules)

        assert se.medicare_tax == Decimal("9235000") * Decimal("0.029")


class TestAdditionalMedicare:
    """0.9% on SE earnings over the filing status threshold."""

    def test_zero_at_or_below_single_threshold(self, rules):
        se = calculate_self_employment_tax(Decimal("216500"), FilingStatus.SINGLE, rules)

        assert se.se_taxable_earnings <= 200000
        assert se.additional_medicare_tax == 0

    def test_only_excess_over_single_threshold(self, rules):
        se = calculate_self_employment_tax(Decimal("216570"), FilingStatus.SINGLE, rules)

        assert se.se_taxable_earnings > 200000
        assert se.additional_medicare_tax > 0
        assert se.additional_medicare_tax == (se.se_taxable_earnings - 200000) * Decimal("0.009")

    def test_single_300k(self, rules):
        se = calculate_self_employment_tax(Decimal("300000"), FilingStatus.SINGLE, rules)

        assert se.se_taxable_earnings == Decimal("277050")
        assert se.additional_medicare_tax == Decimal("693.45")

    def test_married_threshold_is_higher(self, rules):
        se = calculate_self_employment_tax(Decimal("300000"), FilingStatus.MARRIED, rules)

        assert se.additional_medicare_tax == Decimal("243.45")
