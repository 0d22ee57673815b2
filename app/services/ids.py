"""Human-readable identifiers for customers and transactions.

Customer ids look like SFMTL0001. Transaction numbers look like
TXN-2026-10-000042, where year and month are taken in Pacific/Auckland
and the sequence is a single counter that never resets.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

CUSTOMER_PREFIX = "SFMTL"


def format_customer_id(sequence: int) -> str:
    return f"{CUSTOMER_PREFIX}{sequence:04d}"


def format_txn_number(
    sequence: int,
    now: datetime,
    tz_name: str = "Pacific/Auckland",
) -> str:
    local = now.astimezone(ZoneInfo(tz_name))
    return f"TXN-{local:%Y}-{local:%m}-{sequence:06d}"
