"""Currency and percentage formatting, and lenient currency parsing.

Display rounding lives here only. Calculations keep full precision and
round at the last moment, when a figure is turned into text.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

Number = Union[Decimal, int, float]

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER = re.compile(r"-?(\d+\.?\d*|\.\d+)")


def round_to_dollar(amount: Number) -> int:
    """Round to nearest dollar per IRS rules (0.50+ rounds away from zero)."""
    return int(Decimal(str(amount)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_currency(amount: Number, digits: int = 0) -> str:
    """Format as US dollars.

    Args:
        amount: Value to format
        digits: Fractional digits - 0 for whole-dollar display, 2 for cents

    Returns:
        String like "$1,235", "-$1,234.56"
    """
    value = Decimal(str(amount))
    if not value.is_finite():
        return f"${value}"

    quantum = Decimal(1).scaleb(-digits)
    rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.{digits}f}"


def format_percentage(rate: Number) -> str:
    """Format a decimal rate as a whole percentage (0.124 -> "12%")."""
    percent = (Decimal(str(rate)) * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return f"{percent}%"


def parse_currency(value: Optional[str]) -> Decimal:
    """Parse a user-typed currency string, returning 0 when nothing parses.

    Everything except digits, '.' and '-' is stripped first, so "$1,234.50"
    parses as 1234.50. The longest leading number wins ("12.3.4" -> 12.3).
    Never raises.
    """
    if value is None:
        return Decimal(0)

    cleaned = _NON_NUMERIC.sub("", str(value))
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return Decimal(0)

    try:
        return Decimal(match.group(0))
    except InvalidOperation:
        return Decimal(0)
