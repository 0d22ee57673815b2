"""Transfer quotes.

Works out what the operator form would otherwise compute client-side:
the fee for the amount, the total the customer pays, and what the
beneficiary receives at the day's rate. The resulting cents and payout
figures are what a subsequent transaction submission should carry.
"""

from app.compliance.rules.enhanced_aml import requires_enhanced_aml
from app.models import ExchangeRates, FeeSettings, Quote
from app.services.currency import (
    calculate_foreign_amount,
    calculate_total,
    display_to_cents,
)
from app.services.fees import calculate_fee


def build_quote(
    amount_nzd: float,
    currency: str,
    rates: ExchangeRates,
    fee_settings: FeeSettings,
    enhanced_aml_threshold_cents: int = 100000,
) -> Quote:
    amount_cents = display_to_cents(f"{amount_nzd:.2f}")
    fee_cents = display_to_cents(f"{calculate_fee(amount_nzd, fee_settings):.2f}")
    rate = rates.rate_for(currency)

    return Quote(
        amount_nzd_cents=amount_cents,
        fee_nzd_cents=fee_cents,
        total_paid_nzd_cents=calculate_total(amount_cents, fee_cents),
        rate=rate,
        currency=currency,
        total_foreign_received=calculate_foreign_amount(amount_cents, rate),
        requires_enhanced_aml=requires_enhanced_aml(
            amount_cents, enhanced_aml_threshold_cents
        ),
    )
