"""Pydantic models for the remittance compliance API.

Request and response bodies use camelCase on the wire (``amountNzdCents``)
and snake_case in Python (``amount_nzd_cents``). Violations report the
wire name so operators see the same field names the form submitted.
"""

from datetime import date, datetime
from typing import Any, Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


CURRENCIES = ("WST", "AUD", "USD")

PROOF_OF_ADDRESS_TYPES = (
    "POWER_BILL",
    "WATER_BILL",
    "COUNCIL_RATES",
    "BANK_STATEMENT",
    "IRD_LETTER",
    "GOVT_LETTER",
    "BILL",
    "OTHER",
)

SOURCE_OF_FUNDS_CATEGORIES = (
    "SALARY_WAGES",
    "SAVINGS",
    "LOAN_FUNDS",
    "SALE_OF_PROPERTY",
    "SELF_EMPLOYED",
    "FAMILY_CONTRIBUTIONS",
    "FUNDRAISING_RAFFLE",
    "OTHER",
)

ErrorKind = Literal[
    "REQUIRED",
    "INVALID_TYPE",
    "INVALID_PHONE_FORMAT",
    "INVALID_EMAIL_FORMAT",
    "UNDERAGE",
    "INVALID_AMOUNT",
    "INVALID_CURRENCY",
    "ENHANCED_AML_REQUIRED",
    "INVALID_ENUM_VALUE",
]


def wire_name(attr: str) -> str:
    """Return the camelCase JSON name for a snake_case model attribute."""
    return to_camel(attr)


class CamelModel(BaseModel):
    """Base model: camelCase aliases, accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Violation(CamelModel):
    """A single field-level compliance failure."""

    field: str
    kind: ErrorKind
    message: str
    context: Optional[dict[str, Any]] = None


class TransactionRequest(CamelModel):
    """A prospective remittance, as submitted by an operator or agent.

    Only the parser-level essentials are required here. Business
    requirements (names, sender phone, enhanced AML fields) are enforced by
    the compliance validator so that every failure is reported together.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    customer_id: str
    agent_id: Optional[str] = None

    # Beneficiary
    beneficiary_name: Optional[str] = None
    beneficiary_village: Optional[str] = None
    beneficiary_phone: Optional[str] = None
    bank: Optional[str] = None
    account_number: Optional[str] = None
    account_name: Optional[str] = None

    # Sender
    sender_name: Optional[str] = None
    sender_address: Optional[str] = None
    sender_phone: Optional[str] = None
    sender_email: Optional[str] = None
    occupation: Optional[str] = None
    purpose_of_transfer: Optional[str] = None

    # Money (minor units for NZD, caller-derived totals)
    amount_nzd_cents: int
    fee_nzd_cents: int
    rate: float
    currency: str
    total_paid_nzd_cents: int
    total_foreign_received: float

    # KYC
    dob: date
    verified_with_original_id: bool = False
    proof_of_address_type: Optional[str] = None
    source_of_funds: Optional[str] = None
    source_of_funds_details: Optional[str] = None
    bank_account_details: Optional[str] = None
    proof_documents_provided: Optional[str] = None

    # Enhanced AML (mandatory at or above the threshold)
    sender_street_address: Optional[str] = None
    sender_suburb: Optional[str] = None
    sender_city: Optional[str] = None
    sender_postcode: Optional[str] = None
    sender_home_phone: Optional[str] = None
    sender_mobile_phone: Optional[str] = None
    employer_name: Optional[str] = None
    employer_address: Optional[str] = None
    employer_phone: Optional[str] = None
    reason_for_remittance: Optional[str] = None
    relationship_to_beneficiary: Optional[str] = None

    # Identity documents
    id1_country_and_type: Optional[str] = None
    id1_number: Optional[str] = None
    id1_issue_date: Optional[date] = None
    id1_expiry_date: Optional[date] = None
    id2_country_and_type: Optional[str] = None
    id2_number: Optional[str] = None
    id2_issue_date: Optional[date] = None
    id2_expiry_date: Optional[date] = None


class ComplianceResult(CamelModel):
    """Outcome of validating a transaction request."""

    accepted: bool
    request: Optional[TransactionRequest] = None
    errors: list[Violation] = []


class CustomerRequest(CamelModel):
    """New customer onboarding form."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    dob: date
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class CustomerResult(CamelModel):
    """Outcome of validating a customer onboarding request."""

    accepted: bool
    request: Optional[CustomerRequest] = None
    errors: list[Violation] = []


class Customer(CamelModel):
    """A customer persisted in the store."""

    id: str
    customer_id: str  # human-readable, e.g. SFMTL0001
    first_name: str
    last_name: str
    full_name: str
    dob: date
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime


class StoredTransaction(TransactionRequest):
    """An accepted transaction with its number and reporting flags."""

    id: str
    txn_number: str
    is_ptr_required: bool
    is_go_aml_export_ready: bool
    go_aml_exported_at: Optional[datetime] = None
    created_at: datetime


class ValidationFailedResponse(CamelModel):
    """Body returned with HTTP 400 when a submission is rejected."""

    error: str = "Validation failed"
    details: list[Violation]


class TransactionCreatedResponse(CamelModel):
    transaction: StoredTransaction


class CustomerResponse(CamelModel):
    customer: Customer


class Pagination(CamelModel):
    page: int
    limit: int
    total_count: int
    total_pages: int


class TransactionListResponse(CamelModel):
    transactions: list[StoredTransaction]
    pagination: Pagination


class CustomerSearchResponse(CamelModel):
    customers: list[Customer]


class ActivityEntry(CamelModel):
    """Activity log entry linking an action to the entity it touched."""

    id: str
    action: str  # e.g. TRANSACTION_CREATED
    entity_type: Literal["TRANSACTION", "CUSTOMER"]
    entity_id: str
    description: str
    metadata: dict[str, Any] = {}
    timestamp: datetime


class FeeBracket(CamelModel):
    min_amount: float = Field(ge=0)
    max_amount: float = Field(ge=0)
    fee_amount: float = Field(ge=0)


class FeeSettings(CamelModel):
    """Fee schedule. Amounts are NZD dollars, not cents."""

    fee_type: Literal["FIXED", "PERCENTAGE", "BRACKET"] = "FIXED"
    default_fee_nzd: float = Field(default=5.0, ge=0)
    fee_percentage: float = Field(default=0.0, ge=0)
    minimum_fee_nzd: float = Field(default=0.0, ge=0)
    maximum_fee_nzd: Optional[float] = Field(default=None, ge=0)
    brackets: list[FeeBracket] = []


class FeeCalculationRequest(CamelModel):
    amount_nzd: float = Field(allow_inf_nan=False)


class FeeCalculationResponse(CamelModel):
    fee_nzd: float


class ExchangeRates(CamelModel):
    """Foreign-per-NZD rates for one Pacific/Auckland calendar day."""

    date_key: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    nzd_wst: float = Field(alias="NZD_WST", gt=0, allow_inf_nan=False)
    nzd_aud: float = Field(alias="NZD_AUD", gt=0, allow_inf_nan=False)
    nzd_usd: float = Field(alias="NZD_USD", gt=0, allow_inf_nan=False)

    def rate_for(self, currency: str) -> float:
        return getattr(self, f"nzd_{currency.lower()}")


class ExchangeRatesResponse(CamelModel):
    rates: ExchangeRates
    is_default: bool


class QuoteRequest(CamelModel):
    amount_nzd: float = Field(ge=0, allow_inf_nan=False)
    currency: Literal["WST", "AUD", "USD"]
    date_key: Optional[str] = None


class Quote(CamelModel):
    """Fee, total and payout for a prospective transfer."""

    amount_nzd_cents: int
    fee_nzd_cents: int
    total_paid_nzd_cents: int
    rate: float
    currency: str
    total_foreign_received: float
    requires_enhanced_aml: bool


class ComplianceConfig(CamelModel):
    """Tunable compliance thresholds."""

    enhanced_aml_threshold_cents: int = Field(default=100000, ge=0)  # NZD 1,000.00
    ptr_threshold_cents: int = Field(default=100000, ge=0)
    minimum_age_years: int = Field(default=18, ge=0, le=150)
    reference_timezone: str = "Pacific/Auckland"
    search_match_threshold: int = Field(default=80, ge=0, le=100)

    @field_validator("reference_timezone")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise ValueError(f"Unknown time zone: {v!r}") from None
        return v


class AmlExportRequest(CamelModel):
    """Transaction ids to mark as exported to goAML."""

    transaction_ids: list[str]


class AmlExportResponse(CamelModel):
    success: bool
    marked: int
    message: str
