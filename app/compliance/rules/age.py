"""Minimum age rule.

Customers must be at least 18. Age is judged against the calendar date in
one reference time zone (Pacific/Auckland), not the server's local zone:
a customer whose 18th birthday is "today" in Auckland passes even while it
is still "yesterday" in UTC.

The cutoff is computed as start-of-day in the reference zone minus N
years. When that lands on 29 February of a non-leap year it clamps to
28 February.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from app.models import Violation


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # 29 Feb -> 28 Feb in a non-leap year
        return day.replace(year=day.year - years, day=28)


def age_cutoff(
    now: datetime,
    minimum_age: int = 18,
    tz_name: str = "Pacific/Auckland",
) -> date:
    """Latest date of birth that still satisfies the minimum age at `now`."""
    local_today = now.astimezone(ZoneInfo(tz_name)).date()
    return _years_before(local_today, minimum_age)


def check_age(
    dob: date,
    now: datetime,
    minimum_age: int = 18,
    tz_name: str = "Pacific/Auckland",
    field: str = "dob",
) -> list[Violation]:
    """Reject a date of birth that makes the customer younger than minimum_age."""
    cutoff = age_cutoff(now, minimum_age, tz_name)
    if dob <= cutoff:
        return []
    return [
        Violation(
            field=field,
            kind="UNDERAGE",
            message=f"Customer must be {minimum_age} or older",
            context={"cutoff": cutoff.isoformat()},
        )
    ]
