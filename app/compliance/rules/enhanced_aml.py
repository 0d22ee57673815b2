"""Enhanced AML rule.

Transfers of NZD 1,000.00 (100000 cents) or more need the extended
customer due diligence set: full residential address, home and mobile
phone, employer details, reason for remittance, relationship to the
beneficiary, source-of-funds category, bank account details and proof of
address. Below the threshold none of these are required.

All missing fields are reported together in one violation.

sourceOfFundsDetails is not in the list: the category is
mandatory above the threshold, the free-text detail stays optional.
"""

from app.compliance.rules.required import is_blank
from app.models import TransactionRequest, Violation, wire_name

ENHANCED_AML_FIELDS = (
    "sender_street_address",
    "sender_suburb",
    "sender_city",
    "sender_postcode",
    "sender_home_phone",
    "sender_mobile_phone",
    "employer_name",
    "employer_address",
    "employer_phone",
    "reason_for_remittance",
    "relationship_to_beneficiary",
    "source_of_funds",
    "bank_account_details",
    "proof_of_address_type",
    "proof_documents_provided",
)


def requires_enhanced_aml(amount_nzd_cents: int, threshold: int = 100000) -> bool:
    """Threshold is inclusive: exactly NZD 1,000.00 requires the extended set."""
    return amount_nzd_cents >= threshold


def missing_enhanced_fields(request: TransactionRequest) -> list[str]:
    """Wire names of enhanced fields that are absent or blank, in form order."""
    return [
        wire_name(attr)
        for attr in ENHANCED_AML_FIELDS
        if is_blank(getattr(request, attr))
    ]


def check_enhanced_aml(
    request: TransactionRequest,
    threshold: int = 100000,
) -> list[Violation]:
    """Attach a single ENHANCED_AML_REQUIRED violation to amountNzdCents."""
    if not requires_enhanced_aml(request.amount_nzd_cents, threshold):
        return []

    missing = missing_enhanced_fields(request)
    if not missing:
        return []

    return [
        Violation(
            field="amountNzdCents",
            kind="ENHANCED_AML_REQUIRED",
            message=(
                f"Transactions of NZD {threshold / 100:,.2f} or more require "
                f"enhanced AML details; missing: {', '.join(missing)}"
            ),
            context={"threshold": threshold, "missing": missing},
        )
    ]
