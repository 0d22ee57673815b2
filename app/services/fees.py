"""Transfer fee calculation.

Three schedules are supported:
  - FIXED:      always the default fee
  - PERCENTAGE: a percentage of the amount, clamped to [minimum, maximum]
  - BRACKET:    the fee of the first bracket with min <= amount <= max,
                falling back to the default fee when no bracket matches

All amounts are NZD dollars.
"""

from app.logging_config import get_logger
from app.models import FeeSettings

logger = get_logger(__name__)


def calculate_fee(amount_nzd: float, settings: FeeSettings) -> float:
    """Return the fee in NZD dollars for a transfer of `amount_nzd`."""
    if settings.fee_type == "BRACKET":
        for bracket in sorted(settings.brackets, key=lambda b: b.min_amount):
            if bracket.min_amount <= amount_nzd <= bracket.max_amount:
                logger.debug(
                    "Bracket fee %.2f for amount %.2f", bracket.fee_amount, amount_nzd
                )
                return bracket.fee_amount
        logger.debug("No fee bracket matched %.2f, using default fee", amount_nzd)
        return settings.default_fee_nzd

    if settings.fee_type == "PERCENTAGE":
        fee = amount_nzd * settings.fee_percentage / 100
        fee = max(fee, settings.minimum_fee_nzd)
        if settings.maximum_fee_nzd is not None:
            fee = min(fee, settings.maximum_fee_nzd)
        return round(fee, 2)

    return settings.default_fee_nzd
