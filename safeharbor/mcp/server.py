"""Safe Harbor MCP Server - FastMCP implementation for estimated tax tools."""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field, ValidationError

from safeharbor.sdk import (
    DEFAULT_TAX_YEAR,
    TaxInputs,
    build_payment_plan,
    calculate_taxes,
    compare_penalty_exposure,
    explain_calculation,
    load_payment_schedule,
    load_tax_rules,
    parse_currency,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("safe-harbor")


def _build_inputs(filing_status: str, prior_year_tax: str, prior_year_agi: str, current_year_profit: str) -> TaxInputs:
    return TaxInputs(
        filing_status=filing_status,
        prior_year_tax=parse_currency(prior_year_tax),
        prior_year_agi=parse_currency(prior_year_agi),
        current_year_profit=parse_currency(current_year_profit),
    )


# --- Tools ---

@mcp.tool()
async def calculate_estimated_tax(
    filing_status: str = Field(description="'single' or 'married' (filing jointly)"),
    prior_year_tax: str = Field(description="Prior year total tax liability (e.g., '$25,000')"),
    prior_year_agi: str = Field(description="Prior year adjusted gross income"),
    current_year_profit: str = Field(description="Projected self-employment net profit this year"),
    year: int = Field(default=DEFAULT_TAX_YEAR, description="Tax year (e.g., 2025)"),
    explain: bool = Field(default=False, description="Include the step-by-step walkthrough"),
) -> dict[str, Any]:
    """Calculate the required annual and quarterly estimated tax payment under the Safe Harbor rule.

    Returns SE tax and income tax breakdowns, both payment minimums, the recommended method and savings.
    """
    try:
        rules = load_tax_rules(year)
        inputs = _build_inputs(filing_status, prior_year_tax, prior_year_agi, current_year_profit)
        result = calculate_taxes(inputs, rules)

        output = result.model_dump(mode="json")
        output["recommended_method"] = result.recommended_method

        penalty = compare_penalty_exposure(result)
        if penalty:
            output["penalty_comparison"] = penalty.model_dump(mode="json")
        if explain:
            output["steps"] = [s.model_dump(mode="json") for s in explain_calculation(result, rules)]

        return output

    except (FileNotFoundError, ValidationError) as e:
        logger.error(f"Error calculating estimated tax: {e}")
        return {"error": str(e)}


@mcp.tool()
async def get_payment_schedule(
    filing_status: str = Field(description="'single' or 'married' (filing jointly)"),
    prior_year_tax: str = Field(description="Prior year total tax liability"),
    prior_year_agi: str = Field(description="Prior year adjusted gross income"),
    current_year_profit: str = Field(description="Projected self-employment net profit this year"),
    year: int = Field(default=DEFAULT_TAX_YEAR, description="Tax year (e.g., 2025)"),
) -> dict[str, Any]:
    """Get the four quarterly payment amounts and due dates."""
    try:
        rules = load_tax_rules(year)
        inputs = _build_inputs(filing_status, prior_year_tax, prior_year_agi, current_year_profit)
        result = calculate_taxes(inputs, rules)
        plan = build_payment_plan(result, load_payment_schedule(year))

        return {
            "tax_year": result.tax_year,
            "required_annual_payment": str(result.required_annual_payment),
            "payments": [p.model_dump(mode="json") for p in plan],
        }

    except (FileNotFoundError, KeyError, ValidationError) as e:
        logger.error(f"Error building payment schedule: {e}")
        return {"error": str(e), "payments": []}


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
