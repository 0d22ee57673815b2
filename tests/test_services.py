"""Tests for fees, currency helpers, identifiers, quotes and PTR flags."""

from datetime import datetime, timezone

import pytest

from app.compliance.ptr import compute_ptr_flags
from app.models import ExchangeRates, FeeBracket, FeeSettings
from app.services.currency import (
    calculate_foreign_amount,
    calculate_total,
    cents_to_display,
    display_to_cents,
)
from app.services.fees import calculate_fee
from app.services.ids import format_customer_id, format_txn_number
from app.services.quotes import build_quote
from app.services.rates import resolve_rates, today_key
from app.storage.memory import MemoryStore
from tests.conftest import make_request

BRACKETS = [
    FeeBracket(min_amount=0, max_amount=499.99, fee_amount=5.0),
    FeeBracket(min_amount=500, max_amount=999.99, fee_amount=10.0),
    FeeBracket(min_amount=1000, max_amount=4999.99, fee_amount=15.0),
]


class TestCalculateFee:
    def test_fixed(self):
        assert calculate_fee(250.0, FeeSettings()) == 5.0

    def test_fixed_custom_default(self):
        assert calculate_fee(250.0, FeeSettings(default_fee_nzd=7.5)) == 7.5

    def test_percentage(self):
        settings = FeeSettings(fee_type="PERCENTAGE", fee_percentage=2.0)
        assert calculate_fee(500.0, settings) == 10.0

    def test_percentage_minimum(self):
        settings = FeeSettings(fee_type="PERCENTAGE", fee_percentage=1.0, minimum_fee_nzd=5.0)
        assert calculate_fee(100.0, settings) == 5.0

    def test_percentage_maximum(self):
        settings = FeeSettings(
            fee_type="PERCENTAGE", fee_percentage=2.0, maximum_fee_nzd=25.0
        )
        assert calculate_fee(5000.0, settings) == 25.0

    def test_percentage_no_maximum(self):
        settings = FeeSettings(fee_type="PERCENTAGE", fee_percentage=2.0)
        assert calculate_fee(5000.0, settings) == 100.0

    def test_percentage_rounded_to_cents(self):
        settings = FeeSettings(fee_type="PERCENTAGE", fee_percentage=3.333)
        assert calculate_fee(100.0, settings) == 3.33

    @pytest.mark.parametrize(
        "amount,fee",
        [(0, 5.0), (499.99, 5.0), (500, 10.0), (999.99, 10.0), (1000, 15.0)],
    )
    def test_bracket(self, amount, fee):
        settings = FeeSettings(fee_type="BRACKET", brackets=BRACKETS)
        assert calculate_fee(amount, settings) == fee

    def test_bracket_no_match_uses_default(self):
        settings = FeeSettings(fee_type="BRACKET", default_fee_nzd=20.0, brackets=BRACKETS)
        assert calculate_fee(10000.0, settings) == 20.0

    def test_bracket_order_independent(self):
        settings = FeeSettings(fee_type="BRACKET", brackets=list(reversed(BRACKETS)))
        assert calculate_fee(750.0, settings) == 10.0


class TestCurrencyHelpers:
    def test_cents_to_display(self):
        assert cents_to_display(123456) == "$1234.56"
        assert cents_to_display(5) == "$0.05"

    @pytest.mark.parametrize(
        "text,cents",
        [("$1,234.56", 123456), ("12", 1200), ("0.005", 1), ("", 0), ("abc", 0),
         ("1.2.3", 120), (".5", 50)],
    )
    def test_display_to_cents(self, text, cents):
        assert display_to_cents(text) == cents

    def test_total(self):
        assert calculate_total(150000, 1500) == 151500

    def test_foreign_amount(self):
        assert calculate_foreign_amount(50000, 2.1) == 1050.0
        assert calculate_foreign_amount(12345, 0.61) == 75.30


class TestIdentifiers:
    def test_customer_id(self):
        assert format_customer_id(1) == "SFMTL0001"
        assert format_customer_id(12345) == "SFMTL12345"

    def test_txn_number_uses_auckland_month(self):
        # 30 Sep 12:00 UTC is 1 Oct 01:00 in Auckland (NZDT)
        now = datetime(2026, 9, 30, 12, 0, tzinfo=timezone.utc)
        assert format_txn_number(42, now) == "TXN-2026-10-000042"

    def test_txn_number_year_rollover(self):
        now = datetime(2026, 12, 31, 11, 30, tzinfo=timezone.utc)
        assert format_txn_number(7, now) == "TXN-2027-01-000007"


class TestPtrFlags:
    def test_international_over_threshold(self):
        flags = compute_ptr_flags(make_request(amount=100000, fee=1500, currency="AUD"))
        assert flags.is_ptr_required
        assert flags.is_go_aml_export_ready

    def test_wst_never_ptr(self):
        flags = compute_ptr_flags(make_request(amount=200000, currency="WST"))
        assert not flags.is_ptr_required
        assert flags.is_go_aml_export_ready

    def test_total_paid_drives_threshold(self):
        """Amount under NZD 1,000 but amount + fee at 1,000 still flags."""
        flags = compute_ptr_flags(make_request(amount=99000, fee=1000, currency="USD"))
        assert flags.is_ptr_required

    def test_under_threshold(self):
        flags = compute_ptr_flags(make_request(amount=50000, currency="USD"))
        assert not flags.is_ptr_required
        assert not flags.is_go_aml_export_ready


class TestRates:
    now = datetime(2026, 10, 18, 21, 0, tzinfo=timezone.utc)

    def test_today_key_in_auckland(self):
        assert today_key(self.now) == "2026-10-19"

    def test_defaults_when_missing(self):
        rates, is_default = resolve_rates(
            MemoryStore(), None, self.now, {"NZD_WST": 2.1, "NZD_AUD": 0.93, "NZD_USD": 0.61}
        )
        assert is_default
        assert rates.date_key == "2026-10-19"
        assert rates.rate_for("WST") == 2.1

    def test_stored_rates_preferred(self):
        store = MemoryStore()
        store.set_rates(ExchangeRates(date_key="2026-10-19", NZD_WST=2.2, NZD_AUD=0.9, NZD_USD=0.6))
        rates, is_default = resolve_rates(store, None, self.now, {})
        assert not is_default
        assert rates.rate_for("USD") == 0.6


class TestBuildQuote:
    rates = ExchangeRates(date_key="2026-10-19", NZD_WST=2.1, NZD_AUD=0.93, NZD_USD=0.61)

    def test_quote_fixed_fee(self):
        quote = build_quote(500.0, "WST", self.rates, FeeSettings())
        assert quote.amount_nzd_cents == 50000
        assert quote.fee_nzd_cents == 500
        assert quote.total_paid_nzd_cents == 50500
        assert quote.total_foreign_received == 1050.0
        assert not quote.requires_enhanced_aml

    def test_quote_flags_enhanced_aml(self):
        quote = build_quote(1000.0, "AUD", self.rates, FeeSettings())
        assert quote.requires_enhanced_aml
        assert quote.rate == 0.93
        assert quote.total_foreign_received == 930.0
