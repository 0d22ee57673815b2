"""Compliance validator.

Runs every compliance rule against a request, in a fixed order:
  1. Required names and sender phone
  2. Phone format (E.164)
  3. Email format
  4. Minimum age in the reference time zone
  5. Monetary signs
  6. Payout currency
  7. Enhanced AML fields at or above the threshold
  8. Proof-of-address / source-of-funds codes

Rules never short-circuit: the result carries every violation, in rule
order, so the first error in a rendered report is deterministic.

Validation is a pure function of (request, now, config). `now` must be
supplied by the caller; nothing here reads the system clock.
"""

from datetime import datetime
from typing import Optional

from app.compliance.rules.age import check_age
from app.compliance.rules.amounts import check_amounts
from app.compliance.rules.currency import check_currency
from app.compliance.rules.email import check_email
from app.compliance.rules.enhanced_aml import check_enhanced_aml
from app.compliance.rules.enums import check_enum_fields
from app.compliance.rules.phone import check_phone_formats
from app.compliance.rules.required import check_required
from app.models import (
    ComplianceConfig,
    ComplianceResult,
    CustomerRequest,
    CustomerResult,
    TransactionRequest,
    Violation,
)


def _require_aware(now: Optional[datetime]) -> None:
    """Missing or naive clocks are caller bugs, not validation failures."""
    if now is None:
        raise TypeError("validate() requires a 'now' datetime")
    if not isinstance(now, datetime):
        raise TypeError(f"'now' must be a datetime, got {type(now).__name__}")
    if now.tzinfo is None or now.utcoffset() is None:
        raise ValueError("'now' must be timezone-aware")


class ComplianceValidator:
    """Validates transactions and customers against the compliance rules."""

    def __init__(self, config: ComplianceConfig) -> None:
        self.config = config

    def validate(self, request: TransactionRequest, now: datetime) -> ComplianceResult:
        """Validate a transaction request and collect every violation."""
        _require_aware(now)
        config = self.config

        violations: list[Violation] = [
            # 1. Required fields
            *check_required([
                ("beneficiaryName", "Beneficiary name", request.beneficiary_name),
                ("senderName", "Sender name", request.sender_name),
                ("senderPhone", "Sender phone", request.sender_phone),
            ]),
            # 2. Phone format
            *check_phone_formats([
                ("senderPhone", request.sender_phone),
                ("beneficiaryPhone", request.beneficiary_phone),
                ("senderHomePhone", request.sender_home_phone),
                ("senderMobilePhone", request.sender_mobile_phone),
                ("employerPhone", request.employer_phone),
            ]),
            # 3. Email format
            *check_email("senderEmail", request.sender_email),
            # 4. Age
            *check_age(
                dob=request.dob,
                now=now,
                minimum_age=config.minimum_age_years,
                tz_name=config.reference_timezone,
            ),
            # 5. Amounts
            *check_amounts(request),
            # 6. Currency
            *check_currency(request.currency),
            # 7. Enhanced AML
            *check_enhanced_aml(request, config.enhanced_aml_threshold_cents),
            # 8. Enumerations
            *check_enum_fields(request),
        ]

        if violations:
            return ComplianceResult(accepted=False, errors=violations)
        return ComplianceResult(accepted=True, request=request)

    def validate_customer(self, request: CustomerRequest, now: datetime) -> CustomerResult:
        """Validate a customer onboarding request."""
        _require_aware(now)
        config = self.config

        violations: list[Violation] = [
            *check_required([
                ("firstName", "First name", request.first_name),
                ("lastName", "Last name", request.last_name),
                ("phone", "Phone", request.phone),
            ]),
            *check_phone_formats([("phone", request.phone)]),
            *check_email("email", request.email),
            *check_age(
                dob=request.dob,
                now=now,
                minimum_age=config.minimum_age_years,
                tz_name=config.reference_timezone,
            ),
        ]

        if violations:
            return CustomerResult(accepted=False, errors=violations)
        return CustomerResult(accepted=True, request=request)


def validate(
    request: TransactionRequest,
    now: datetime,
    config: Optional[ComplianceConfig] = None,
) -> ComplianceResult:
    """Validate a transaction with the given (or default) configuration."""
    return ComplianceValidator(config or ComplianceConfig()).validate(request, now)


def validate_customer(
    request: CustomerRequest,
    now: datetime,
    config: Optional[ComplianceConfig] = None,
) -> CustomerResult:
    return ComplianceValidator(config or ComplianceConfig()).validate_customer(
        request, now
    )
