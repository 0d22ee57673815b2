"""Exchange-rate lookup by Pacific/Auckland calendar day."""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from app.models import ExchangeRates
from app.storage.memory import MemoryStore


def today_key(now: datetime, tz_name: str = "Pacific/Auckland") -> str:
    """YYYY-MM-DD for `now` in the reference time zone."""
    return now.astimezone(ZoneInfo(tz_name)).strftime("%Y-%m-%d")


def resolve_rates(
    store: MemoryStore,
    date_key: Optional[str],
    now: datetime,
    default_rates: dict[str, float],
    tz_name: str = "Pacific/Auckland",
) -> tuple[ExchangeRates, bool]:
    """Rates for `date_key` (today when omitted) and whether they are defaults."""
    key = date_key or today_key(now, tz_name)
    stored = store.get_rates(key)
    if stored is not None:
        return stored, False
    return ExchangeRates(date_key=key, **default_rates), True
