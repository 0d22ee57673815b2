"""Monetary field rule.

NZD amounts are integer cents and may be zero but never negative. The
exchange rate must be strictly positive. The foreign payout may be zero.
NaN and infinity are rejected for the float fields. Totals are computed
by the caller; this rule only checks their sign.
"""

import math

from app.models import TransactionRequest, Violation


def check_amounts(request: TransactionRequest) -> list[Violation]:
    """One INVALID_AMOUNT violation per monetary field with a bad sign."""
    checks = [
        ("amountNzdCents", request.amount_nzd_cents, False, "Amount"),
        ("feeNzdCents", request.fee_nzd_cents, False, "Fee"),
        ("rate", request.rate, True, "Rate"),
        ("totalPaidNzdCents", request.total_paid_nzd_cents, False, "Total paid"),
        (
            "totalForeignReceived",
            request.total_foreign_received,
            False,
            "Total foreign received",
        ),
    ]

    violations: list[Violation] = []
    for field, value, strictly_positive, label in checks:
        if not math.isfinite(value):
            violations.append(
                Violation(
                    field=field,
                    kind="INVALID_AMOUNT",
                    message=f"{label} must be a finite number",
                )
            )
        elif strictly_positive and value <= 0:
            violations.append(
                Violation(
                    field=field,
                    kind="INVALID_AMOUNT",
                    message=f"{label} must be greater than zero",
                )
            )
        elif value < 0:
            violations.append(
                Violation(
                    field=field,
                    kind="INVALID_AMOUNT",
                    message=f"{label} must not be negative",
                )
            )
    return violations
