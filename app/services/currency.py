"""Currency helpers for NZD cents and foreign payouts."""

import re
from decimal import ROUND_HALF_UP, Decimal

_LEADING_NUMBER = re.compile(r"\d*\.?\d*")


def cents_to_display(cents: int) -> str:
    """1234 -> "$12.34"."""
    return f"${Decimal(cents) / 100:.2f}"


def display_to_cents(display_value: str) -> int:
    """Parse a typed dollar amount ("$1,234.5") into whole cents.

    Anything other than digits and "." is ignored, and only the leading
    number is used, so "1.2.3" reads as 1.2. Half-cents round up.
    """
    cleaned = re.sub(r"[^0-9.]", "", display_value)
    number = _LEADING_NUMBER.match(cleaned).group(0).rstrip(".")
    if not number:
        return 0
    cents = Decimal(number) * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_total(amount_nzd_cents: int, fee_nzd_cents: int) -> int:
    return amount_nzd_cents + fee_nzd_cents


def calculate_foreign_amount(amount_nzd_cents: int, rate: float) -> float:
    """Foreign currency received for an NZD amount, rounded to 2 places."""
    foreign = Decimal(amount_nzd_cents) / 100 * Decimal(str(rate))
    return float(foreign.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
