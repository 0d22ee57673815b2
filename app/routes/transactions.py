"""Transaction endpoints: create, list, look up and quote."""

import math
import uuid
from datetime import datetime
from typing import Optional, Union

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from app.compliance.ptr import compute_ptr_flags
from app.compliance.validator import ComplianceValidator
from app.logging_config import get_logger
from app.models import (
    Pagination,
    Quote,
    QuoteRequest,
    StoredTransaction,
    TransactionCreatedResponse,
    TransactionListResponse,
    TransactionRequest,
    ValidationFailedResponse,
)
from app.services.activity import record_activity
from app.services.currency import cents_to_display
from app.services.ids import format_txn_number
from app.services.quotes import build_quote
from app.services.rates import resolve_rates
from app.storage.memory import MemoryStore

logger = get_logger(__name__)

router = APIRouter(prefix="/api")


def _get_store(request: Request) -> MemoryStore:
    """Retrieve the memory store from application state."""
    return request.app.state.store


def _get_validator(request: Request) -> ComplianceValidator:
    return request.app.state.validator


def _now(request: Request) -> datetime:
    """Current time from the injected application clock."""
    return request.app.state.clock()


@router.post(
    "/transactions",
    status_code=201,
    response_model=TransactionCreatedResponse,
    responses={400: {"model": ValidationFailedResponse}},
)
async def create_transaction(
    payload: TransactionRequest,
    request: Request,
) -> Union[TransactionCreatedResponse, JSONResponse]:
    """Validate and record a new transaction.

    Every compliance violation is returned at once with HTTP 400. An
    accepted transaction gets a TXN number and PTR flags, and is stored.
    """
    store = _get_store(request)
    validator = _get_validator(request)
    now = _now(request)

    result = validator.validate(payload, now)
    if not result.accepted:
        logger.info(
            "Transaction rejected for customer %s: %s",
            payload.customer_id,
            [(e.field, e.kind) for e in result.errors],
        )
        body = ValidationFailedResponse(details=result.errors)
        return JSONResponse(
            status_code=400, content=body.model_dump(mode="json", by_alias=True)
        )

    customer = store.get_customer(payload.customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")

    config = validator.config
    flags = compute_ptr_flags(payload, config.ptr_threshold_cents)
    txn_number = format_txn_number(
        store.next_value("transaction"), now, config.reference_timezone
    )

    stored = StoredTransaction(
        **{**payload.model_dump(), "customer_id": customer.id},
        id=str(uuid.uuid4()),
        txn_number=txn_number,
        is_ptr_required=flags.is_ptr_required,
        is_go_aml_export_ready=flags.is_go_aml_export_ready,
        created_at=now,
    )
    store.add_transaction(stored)

    record_activity(
        store,
        action="TRANSACTION_CREATED",
        entity_type="TRANSACTION",
        entity_id=stored.id,
        description=(
            f"Transaction {txn_number} created for customer {customer.customer_id} - "
            f"{stored.currency} {stored.total_foreign_received:.2f}"
        ),
        timestamp=now,
        metadata={
            "txnNumber": txn_number,
            "customerId": customer.customer_id,
            "amount": cents_to_display(stored.amount_nzd_cents),
            "currency": stored.currency,
            "isPtrRequired": flags.is_ptr_required,
        },
    )
    logger.info(
        "Transaction %s created (ptr_required=%s)", txn_number, flags.is_ptr_required
    )

    return TransactionCreatedResponse(transaction=stored)


@router.get("/transactions", response_model=TransactionListResponse)
async def list_transactions(
    request: Request,
    customer_id: Optional[str] = Query(default=None, alias="customerId"),
    agent_id: Optional[str] = Query(default=None, alias="agentId"),
    currency: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=500),
    sort_by: str = Query(default="date", alias="sortBy"),
    sort_order: str = Query(default="desc", alias="sortOrder"),
) -> TransactionListResponse:
    """List transactions with optional filters, sorting and pagination.

    Filters:
      - customerId: internal or SFMTL customer id
      - agentId: exact agent id
      - currency: exact payout currency code
      - search: beneficiary name, sender name or TXN number
    Sorting: sortBy=date|amount, sortOrder=asc|desc.
    """
    store = _get_store(request)

    if customer_id is not None:
        customer = store.get_customer(customer_id)
        customer_id = customer.id if customer else customer_id

    matches = store.list_transactions(
        customer_id=customer_id,
        agent_id=agent_id,
        currency=currency,
        search=search,
        sort_by=sort_by,
        descending=sort_order != "asc",
    )
    start = (page - 1) * limit
    return TransactionListResponse(
        transactions=matches[start:start + limit],
        pagination=Pagination(
            page=page,
            limit=limit,
            total_count=len(matches),
            total_pages=math.ceil(len(matches) / limit),
        ),
    )


@router.post("/transactions/quote", response_model=Quote)
async def quote_transaction(quote: QuoteRequest, request: Request) -> Quote:
    """Compute fee, total paid and payout for an amount at the day's rate."""
    state = request.app.state
    rates, _ = resolve_rates(
        store=state.store,
        date_key=quote.date_key,
        now=_now(request),
        default_rates=state.default_rates,
        tz_name=state.validator.config.reference_timezone,
    )
    return build_quote(
        amount_nzd=quote.amount_nzd,
        currency=quote.currency,
        rates=rates,
        fee_settings=state.fee_settings,
        enhanced_aml_threshold_cents=state.validator.config.enhanced_aml_threshold_cents,
    )


@router.get("/transactions/{transaction_id}", response_model=StoredTransaction)
async def get_transaction(transaction_id: str, request: Request) -> StoredTransaction:
    """Look up a transaction by internal id or TXN number."""
    tx = _get_store(request).get_transaction(transaction_id)
    if tx is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return tx
