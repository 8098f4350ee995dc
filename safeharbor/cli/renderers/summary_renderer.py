"""Rich renderer for estimated tax results.

Transforms SDK models into formatted Rich tables.
"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from safeharbor.sdk import (
    CalculationStep,
    PenaltyComparison,
    QuarterlyPayment,
    TaxCalculationResult,
    format_currency,
    format_due_date,
    format_percentage,
)

FILING_STATUS_LABELS = {
    "single": "Single",
    "married": "Married Filing Jointly",
}


def render_summary(
    console: Console,
    result: TaxCalculationResult,
    plan: Optional[list[QuarterlyPayment]] = None,
    steps: Optional[list[CalculationStep]] = None,
    division: Optional[str] = None,
    penalty: Optional[PenaltyComparison] = None,
) -> None:
    """Render a calculation result as Rich tables.

    Args:
        console: Rich Console instance
        result: SDK output from calculate_taxes()
        plan: Optional quarterly plan from build_payment_plan()
        steps: Optional walkthrough from explain_calculation()
        division: Optional closing line for the walkthrough
        penalty: Optional comparison from compare_penalty_exposure()
    """
    _render_inputs(console, result)
    _render_breakdown(console, result)
    _render_recommendation(console, result)

    if plan:
        render_payment_plan(console, plan, result.required_annual_payment)
    if steps:
        _render_steps(console, steps, division)
    if penalty:
        _render_penalty(console, penalty)


def _render_inputs(console: Console, result: TaxCalculationResult) -> None:
    """Render inputs panel."""
    inputs = result.inputs
    prior = result.tax_year - 1

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")

    table.add_row("Filing Status", FILING_STATUS_LABELS[inputs.filing_status.value])
    table.add_row(f"{prior} Total Tax Liability", format_currency(inputs.prior_year_tax))
    table.add_row(f"{prior} Adjusted Gross Income", format_currency(inputs.prior_year_agi))
    table.add_row(f"{result.tax_year} Estimated Net Profit", format_currency(inputs.current_year_profit))

    console.print(Panel(table, title="Your Information", border_style="dim"))


def _render_breakdown(console: Console, result: TaxCalculationResult) -> None:
    """Render SE tax, income tax and both payment minimums."""
    se = result.self_employment_tax
    income = result.income_tax

    table = Table(title=f"{result.tax_year} Estimated Tax Summary", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=30)
    table.add_column("Amount", justify="right", min_width=12)

    table.add_row("[bold]SELF-EMPLOYMENT TAX[/bold]", "")
    table.add_row("  Social Security", format_currency(se.social_security_tax))
    table.add_row("  Medicare", format_currency(se.medicare_tax))
    if se.additional_medicare_tax > 0:
        table.add_row("  Additional Medicare", format_currency(se.additional_medicare_tax))
    table.add_row("  [dim]Total SE Tax[/dim]", f"[dim]{format_currency(se.total_se_tax)}[/dim]")
    table.add_row("", "")

    table.add_row("[bold]INCOME TAX[/bold]", "")
    table.add_row("  Taxable Income", format_currency(income.taxable_income))
    for detail in income.bracket_details:
        table.add_row(
            f"  {format_percentage(detail.rate)} on {format_currency(detail.taxable_at_rate)}",
            format_currency(detail.tax_at_rate),
        )
    table.add_row("  [dim]Federal Income Tax[/dim]", f"[dim]{format_currency(income.federal_income_tax)}[/dim]")
    table.add_row("", "")

    table.add_row(f"Total {result.tax_year} Projected Tax", format_currency(result.current_year_total_tax))
    table.add_row("90% of Projected Tax", format_currency(result.current_year_avoidance_minimum))
    table.add_row(
        f"Safe Harbor ({format_percentage(result.safe_harbor_multiplier)} of {result.tax_year - 1} tax)",
        format_currency(result.safe_harbor_minimum),
    )

    console.print(table)


def _render_recommendation(console: Console, result: TaxCalculationResult) -> None:
    lines = [
        f"Recommended Method: [bold]{result.recommended_method}[/bold]",
        f"[bold green]Pay {format_currency(result.quarterly_payment)} per quarter[/bold green]"
        f" ({format_currency(result.required_annual_payment)} per year)",
    ]
    if result.savings > 0:
        lines.append(f"[dim]You save {format_currency(result.savings)} compared to the alternative.[/dim]")

    console.print(Panel("\n".join(lines), title="Recommendation", border_style="green"))


def render_payment_plan(console: Console, plan: list[QuarterlyPayment], annual_total) -> None:
    """Render the quarterly payment schedule."""
    table = Table(title="Quarterly Payment Schedule", box=box.ROUNDED)
    table.add_column("Quarter", style="bold")
    table.add_column("Due")
    table.add_column("Amount", justify="right", style="green")

    for payment in plan:
        table.add_row(payment.quarter, format_due_date(payment.due), format_currency(payment.amount))
    table.add_row("[bold]Annual Total[/bold]", "", f"[bold]{format_currency(annual_total)}[/bold]")

    console.print(table)


def _render_steps(console: Console, steps: list[CalculationStep], division: Optional[str]) -> None:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("step")

    for step in steps:
        table.add_row(f"[bold]{step.title}[/bold]")
        table.add_row(f"[dim]{step.description}[/dim]")
        table.add_row(f"  {step.calculation}")
        table.add_row("")
    if division:
        table.add_row(f"[bold]{division}[/bold]")

    console.print(Panel(table, title="How This Was Calculated", border_style="dim"))


def _render_penalty(console: Console, penalty: PenaltyComparison) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")

    table.add_row("Worst-case underpayment", f"[yellow]{format_currency(penalty.worst_case_underpayment)}[/yellow]")
    table.add_row(
        f"Potential penalty ({format_percentage(penalty.interest_rate)}, "
        f"{penalty.quarters_underpaid} quarters)",
        f"[red]{format_currency(penalty.potential_penalty)}[/red]",
    )
    if penalty.cash_flow_savings > 0:
        table.add_row("Cash flow advantage of Safe Harbor", format_currency(penalty.cash_flow_savings))

    console.print(Panel(table, title="Penalty Exposure", border_style="yellow"))
