"""Payout currency rule.

The agency pays out in Samoan tala, Australian dollars and US dollars
only. Codes are matched exactly; "wst" is not accepted as "WST".
"""

from app.models import CURRENCIES, Violation


def check_currency(
    currency: str,
    allowed: tuple[str, ...] = CURRENCIES,
) -> list[Violation]:
    if currency in allowed:
        return []
    return [
        Violation(
            field="currency",
            kind="INVALID_CURRENCY",
            message=f"Currency must be one of {', '.join(allowed)}",
            context={"allowed": list(allowed)},
        )
    ]
