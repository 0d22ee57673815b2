"""Shared fixtures for the test suite."""

import pytest
from datetime import date, datetime, timezone
from fastapi.testclient import TestClient

from app.compliance.validator import ComplianceValidator
from app.main import app
from app.models import ComplianceConfig, CustomerRequest, TransactionRequest
from app.storage.memory import MemoryStore


# 2026-10-19 10:00 in Auckland (NZDT, UTC+13)
NOW = datetime(2026, 10, 18, 21, 0, tzinfo=timezone.utc)

ENHANCED_FIELDS = {
    "sender_street_address": "12 Karangahape Road",
    "sender_suburb": "Newton",
    "sender_city": "Auckland",
    "sender_postcode": "1010",
    "sender_home_phone": "+6493021234",
    "sender_mobile_phone": "+6421234567",
    "employer_name": "Fonterra",
    "employer_address": "109 Fanshawe Street, Auckland",
    "employer_phone": "+6493747000",
    "reason_for_remittance": "Family support",
    "relationship_to_beneficiary": "Mother",
    "source_of_funds": "SALARY_WAGES",
    "bank_account_details": "ASB 12-3456-7890123-00",
    "proof_of_address_type": "POWER_BILL",
    "proof_documents_provided": "Payslip, power bill",
}


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def config():
    return ComplianceConfig()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def validator(config):
    return ComplianceValidator(config)


@pytest.fixture
def client():
    with TestClient(app) as c:
        app.state.clock = lambda: NOW
        yield c


def make_request(
    amount=50000,
    fee=500,
    rate=2.1,
    currency="WST",
    dob=date(1985, 6, 1),
    sender_phone="+6421234567",
    enhanced=False,
    **overrides,
) -> TransactionRequest:
    fields = {
        "customer_id": "cust-1",
        "beneficiary_name": "Sina Leota",
        "beneficiary_village": "Lufilufi",
        "sender_name": "Tavita Leota",
        "sender_phone": sender_phone,
        "sender_email": "tavita@example.co.nz",
        "amount_nzd_cents": amount,
        "fee_nzd_cents": fee,
        "rate": rate,
        "currency": currency,
        "total_paid_nzd_cents": amount + fee,
        "total_foreign_received": round(amount / 100 * rate, 2),
        "dob": dob,
        "verified_with_original_id": True,
    }
    if enhanced:
        fields.update(ENHANCED_FIELDS)
    fields.update(overrides)
    return TransactionRequest(**fields)


def make_customer_request(
    first_name="Tavita",
    last_name="Leota",
    dob=date(1985, 6, 1),
    phone="+6421234567",
    email="tavita@example.co.nz",
    address="12 Karangahape Road, Auckland",
) -> CustomerRequest:
    return CustomerRequest(
        first_name=first_name,
        last_name=last_name,
        dob=dob,
        phone=phone,
        email=email,
        address=address,
    )


def make_payload(amount=50000, fee=500, enhanced=False, **overrides) -> dict:
    """JSON body for POST /api/transactions (customerId filled in by the caller)."""
    request = make_request(amount=amount, fee=fee, enhanced=enhanced)
    payload = request.model_dump(mode="json", by_alias=True, exclude_none=True)
    payload.update(overrides)
    return payload
