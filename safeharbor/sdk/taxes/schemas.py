"""Pydantic schemas for tax rules validation.

These schemas validate the tax_rules/*.yaml files and provide typed access
to the year's parameters: standard deductions, SE tax rates and caps,
bracket tables and Safe Harbor multipliers.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class FilingStatus(str, Enum):
    SINGLE = "single"
    MARRIED = "married"  # married filing jointly


class TaxBracket(BaseModel):
    """Single tax bracket entry. Both bounds are inclusive."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower: Decimal = Field(..., ge=0, description="Lowest dollar taxed at this rate")
    upper: Optional[Decimal] = Field(default=None, description="Highest dollar taxed at this rate (None if unbounded)")
    rate: Decimal = Field(..., ge=0, le=1, description="Marginal rate as decimal")

    @model_validator(mode="after")
    def check_bounds(self) -> "TaxBracket":
        if self.upper is not None and self.upper < self.lower:
            raise ValueError(f"bracket upper ({self.upper}) is below lower ({self.lower})")
        return self

    @property
    def capacity(self) -> Optional[Decimal]:
        """Dollars that fit in this bracket, or None for the top bracket."""
        if self.upper is None:
            return None
        return self.upper - self.lower + 1


class FilingStatusRules(BaseModel):
    """Tax rules for a filing status (single, married)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    standard_deduction: Decimal = Field(..., ge=0)
    additional_medicare_threshold: Decimal = Field(..., ge=0)
    tax_brackets: tuple[TaxBracket, ...]

    @model_validator(mode="after")
    def check_brackets(self) -> "FilingStatusRules":
        """Brackets must be contiguous from 0, ascending, with only the last unbounded."""
        brackets = self.tax_brackets
        if not brackets:
            raise ValueError("tax_brackets must contain at least one bracket")

        errors = []
        if brackets[0].lower != 0:
            errors.append(f"first bracket must start at 0, not {brackets[0].lower}")

        for prev, cur in zip(brackets, brackets[1:]):
            if prev.upper is None:
                errors.append(f"unbounded bracket at rate {prev.rate} is not the last bracket")
                continue
            if cur.lower != prev.upper + 1:
                errors.append(f"gap or overlap between {prev.upper} and {cur.lower}")
            if cur.rate <= prev.rate:
                errors.append(f"rate {cur.rate} does not increase over {prev.rate}")

        if brackets[-1].upper is not None:
            errors.append("last bracket must be unbounded")

        if errors:
            raise ValueError("; ".join(errors))
        return self


class SelfEmploymentRules(BaseModel):
    """Self-employment (SECA) tax rules."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    social_security_wage_base: Decimal = Field(..., gt=0, description="SS wage base (max taxable)")
    social_security_rate: Decimal = Field(..., ge=0, le=1, description="Combined SS rate (both halves)")
    medicare_rate: Decimal = Field(..., ge=0, le=1, description="Combined Medicare rate (no cap)")
    additional_medicare_rate: Decimal = Field(..., ge=0, le=1)
    deduction_fraction: Decimal = Field(..., ge=0, le=1, description="Share of SE tax deductible from income")


class SafeHarborRules(BaseModel):
    """Underpayment penalty safe harbor rules."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    high_income_agi_threshold: Decimal = Field(..., ge=0)
    high_income_multiplier: Decimal = Field(..., gt=0)
    standard_multiplier: Decimal = Field(..., gt=0)
    current_year_multiplier: Decimal = Field(..., gt=0, le=1)


class TaxYearRules(BaseModel):
    """Complete tax rules for a year."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # estimated_payments is loaded separately

    year: int
    single: FilingStatusRules
    married: FilingStatusRules
    self_employment: SelfEmploymentRules
    safe_harbor: SafeHarborRules

    def for_status(self, filing_status: FilingStatus) -> FilingStatusRules:
        """Get the per-status rules (deduction, thresholds, brackets)."""
        return getattr(self, FilingStatus(filing_status).value)


class PaymentDueDate(BaseModel):
    """One estimated tax installment due date."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    quarter: Literal["Q1", "Q2", "Q3", "Q4"]
    due: date


class PaymentSchedule(BaseModel):
    """Quarterly estimated payment due dates for a tax year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    quarters: tuple[PaymentDueDate, ...]

    @field_validator("quarters")
    @classmethod
    def check_quarters(cls, quarters: tuple) -> tuple:
        labels = [q.quarter for q in quarters]
        if labels != ["Q1", "Q2", "Q3", "Q4"]:
            raise ValueError(f"expected quarters Q1-Q4 in order, got {labels}")
        dues = [q.due for q in quarters]
        if dues != sorted(dues):
            raise ValueError("due dates must be ascending")
        return quarters


# =============================================================================
# Calculator outputs
# =============================================================================


class SelfEmploymentTaxBreakdown(BaseModel):
    """Schedule SE components."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    se_taxable_earnings: Decimal = Field(..., description="Net profit x 92.35%")
    social_security_tax: Decimal
    medicare_tax: Decimal
    additional_medicare_tax: Decimal
    total_se_tax: Decimal
    se_tax_deduction: Decimal = Field(..., description="Deductible half of SE tax")


class BracketDetail(BaseModel):
    """Income taxed at one marginal rate."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    rate: Decimal
    taxable_at_rate: Decimal
    tax_at_rate: Decimal


class IncomeTaxBreakdown(BaseModel):
    """Federal income tax from the progressive bracket walk."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    adjusted_gross_income: Decimal
    standard_deduction: Decimal
    taxable_income: Decimal
    federal_income_tax: Decimal
    bracket_details: tuple[BracketDetail, ...] = Field(
        default=(), description="Only brackets with income in them, ascending rate",
    )


class SafeHarborResult(BaseModel):
    """Prior-year based minimum payment."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    minimum: Decimal
    multiplier_applied: Decimal
    is_high_income: bool
