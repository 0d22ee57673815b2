"""Prescribed Transaction Report (PTR) flags.

An accepted transaction is flagged for PTR filing when money leaves New
Zealand in a foreign currency and the total paid (amount plus fee) is at
least NZD 1,000.00. WST payouts are never flagged for PTR. goAML export
readiness uses the amount threshold alone, regardless of currency.
"""

from typing import NamedTuple

from app.models import TransactionRequest


class PtrFlags(NamedTuple):
    is_ptr_required: bool
    is_go_aml_export_ready: bool


def compute_ptr_flags(
    request: TransactionRequest,
    threshold: int = 100000,
) -> PtrFlags:
    over_threshold = request.total_paid_nzd_cents >= threshold
    is_international = request.currency != "WST"
    return PtrFlags(
        is_ptr_required=is_international and over_threshold,
        is_go_aml_export_ready=over_threshold,
    )
