"""Pydantic schemas for calculation inputs and results.

All schemas use extra='forbid' and are frozen: a result is created fresh
by every calculation and never mutated afterwards.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from .taxes.schemas import (
    FilingStatus,
    IncomeTaxBreakdown,
    SafeHarborResult,
    SelfEmploymentTaxBreakdown,
)


# =============================================================================
# Inputs
# =============================================================================


class TaxInputs(BaseModel):
    """Caller-supplied figures for one calculation. Whole-dollar USD amounts."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    filing_status: FilingStatus
    prior_year_tax: Decimal = Field(
        ..., ge=0, allow_inf_nan=False,
        description="Total tax liability from the prior year's return",
    )
    prior_year_agi: Decimal = Field(
        ..., ge=0, allow_inf_nan=False,
        description="Adjusted gross income from the prior year's return",
    )
    current_year_profit: Decimal = Field(
        ..., allow_inf_nan=False,
        description="Projected Schedule C net profit for the current year (may be a loss)",
    )


class TaxCalculationResult(BaseModel):
    """Everything derived from one set of TaxInputs."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: int
    inputs: TaxInputs

    # Current year calculation
    self_employment_tax: SelfEmploymentTaxBreakdown
    income_tax: IncomeTaxBreakdown
    current_year_total_tax: Decimal
    current_year_avoidance_minimum: Decimal

    # Safe Harbor calculation
    safe_harbor_multiplier: Decimal
    safe_harbor_minimum: Decimal

    # Final result
    required_annual_payment: Decimal
    quarterly_payment: Decimal = Field(..., description="Annual / 4, unrounded")
    is_current_year_lower: bool = Field(..., description="Ties favor Safe Harbor")
    savings: Decimal

    @property
    def recommended_method(self) -> str:
        return "Current Year Estimate" if self.is_current_year_lower else "Safe Harbor"


# =============================================================================
# Explanations and comparisons
# =============================================================================


class CalculationStep(BaseModel):
    """One line of the human-readable walkthrough."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str
    description: str
    calculation: str


class PenaltyComparison(BaseModel):
    """Rough cost of skipping Safe Harbor and paying nothing extra."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    worst_case_underpayment: Decimal
    potential_penalty: Decimal
    cash_flow_savings: Decimal
    interest_rate: Decimal
    quarters_underpaid: int


class QuarterlyPayment(BaseModel):
    """One installment of the annual required payment."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    quarter: str
    due: date
    amount: Decimal
