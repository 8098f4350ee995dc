"""Quarterly estimated payment plan and Form 1040-ES style vouchers."""

from .formatting import format_currency
from .schemas import QuarterlyPayment, TaxCalculationResult
from .taxes import PaymentSchedule

VOUCHER_INSTRUCTIONS = [
    "1. Fill in your name, Social Security Number, and address above.",
    "2. Write the amount shown on your check.",
    '3. Make check payable to "United States Treasury".',
    '4. Write your SSN and "{year} Form 1040-ES" on your check.',
    "5. Mail to the IRS address for your state (see IRS.gov for addresses).",
    "",
    "Alternatively, pay online at IRS.gov/Payments using:",
    "- IRS Direct Pay (free, from bank account)",
    "- Debit/Credit Card (fees apply)",
    "- EFTPS (Electronic Federal Tax Payment System)",
]


def format_due_date(due) -> str:
    """Format a due date like 'April 15, 2025'."""
    return f"{due.strftime('%B')} {due.day}, {due.year}"


def build_payment_plan(result: TaxCalculationResult, schedule: PaymentSchedule) -> list[QuarterlyPayment]:
    """Pair each due date with the (unrounded) quarterly payment."""
    if schedule.year != result.tax_year:
        raise ValueError(
            f"Payment schedule is for {schedule.year} but the calculation is for {result.tax_year}"
        )

    return [
        QuarterlyPayment(quarter=q.quarter, due=q.due, amount=result.quarterly_payment)
        for q in schedule.quarters
    ]


def render_voucher(payment: QuarterlyPayment, tax_year: int) -> str:
    """Render one payment voucher as plain text."""
    width = 60
    lines = [
        "=" * width,
        "Form 1040-ES Payment Voucher".center(width),
        f"{payment.quarter} - {tax_year} Estimated Tax".center(width),
        "=" * width,
        "",
        f"  {'Your Name:':<18}{'_' * 24}  SSN: {'_' * 11}",
        f"  {'Address:':<18}{'_' * 40}",
        f"  {'City, State, ZIP:':<18}{'_' * 40}",
        "",
        f"  {'Amount of Payment:':<30}{format_currency(payment.amount):>26}",
        f"  {'Due:':<30}{format_due_date(payment.due):>26}",
        "",
        "  Make check payable to: United States Treasury",
        "  Include SSN on check",
        "",
        "  Payment Instructions",
    ]
    lines.extend(f"  {line.format(year=tax_year)}" if line else "" for line in VOUCHER_INSTRUCTIONS)
    lines.extend([
        "",
        f"  Reminder: This payment is due by {format_due_date(payment.due)}.",
        "  Late payments may result in penalties and interest.",
        "-" * width,
    ])
    return "\n".join(lines)


def render_vouchers(result: TaxCalculationResult, schedule: PaymentSchedule) -> str:
    """Render all four vouchers, separated by blank lines."""
    plan = build_payment_plan(result, schedule)
    return "\n\n".join(render_voucher(payment, result.tax_year) for payment in plan)
