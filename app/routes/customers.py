"""Customer onboarding and lookup endpoints."""

import uuid
from datetime import datetime
from typing import Optional, Union

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from app.compliance.validator import ComplianceValidator
from app.logging_config import get_logger
from app.models import (
    Customer,
    CustomerRequest,
    CustomerResponse,
    CustomerSearchResponse,
    ValidationFailedResponse,
)
from app.services.activity import record_activity
from app.services.ids import format_customer_id
from app.storage.memory import DuplicatePhoneError, MemoryStore

logger = get_logger(__name__)

router = APIRouter(prefix="/api")


def _get_store(request: Request) -> MemoryStore:
    """Retrieve the memory store from application state."""
    return request.app.state.store


def _get_validator(request: Request) -> ComplianceValidator:
    return request.app.state.validator


def _now(request: Request) -> datetime:
    return request.app.state.clock()


@router.post(
    "/customers",
    status_code=201,
    response_model=CustomerResponse,
    responses={400: {"model": ValidationFailedResponse}},
)
async def create_customer(
    payload: CustomerRequest,
    request: Request,
) -> Union[CustomerResponse, JSONResponse]:
    """Onboard a new customer.

    Returns 400 with every violation, 409 when the phone number already
    belongs to a customer, or 201 with the new customer.
    """
    store = _get_store(request)
    now = _now(request)

    result = _get_validator(request).validate_customer(payload, now)
    if not result.accepted:
        logger.info(
            "Customer rejected: %s", [(e.field, e.kind) for e in result.errors]
        )
        body = ValidationFailedResponse(details=result.errors)
        return JSONResponse(
            status_code=400, content=body.model_dump(mode="json", by_alias=True)
        )

    existing = store.get_customer_by_phone(payload.phone)
    if existing is not None:
        return _duplicate_phone(existing)

    first_name = payload.first_name.strip()
    last_name = payload.last_name.strip()
    customer = Customer(
        id=str(uuid.uuid4()),
        customer_id=format_customer_id(store.next_value("customer")),
        first_name=first_name,
        last_name=last_name,
        full_name=f"{first_name} {last_name}",
        dob=payload.dob,
        phone=payload.phone,
        email=payload.email or None,
        address=payload.address or None,
        created_at=now,
    )
    try:
        store.add_customer(customer)
    except DuplicatePhoneError as e:
        return _duplicate_phone(e.existing)

    record_activity(
        store,
        action="CUSTOMER_CREATED",
        entity_type="CUSTOMER",
        entity_id=customer.id,
        description=f"Customer {customer.customer_id} created",
        timestamp=now,
        metadata={"customerId": customer.customer_id},
    )
    logger.info("Customer %s created", customer.customer_id)

    return CustomerResponse(customer=customer)


def _duplicate_phone(existing: Customer) -> JSONResponse:
    return JSONResponse(
        status_code=409,
        content={
            "error": "Customer with this phone number already exists",
            "customer": existing.model_dump(mode="json", by_alias=True),
        },
    )


@router.get("/customers/search", response_model=CustomerSearchResponse)
async def search_customers(
    request: Request,
    q: str = Query(default=""),
) -> CustomerSearchResponse:
    """Search customers by name, phone, email or customer id (max 10)."""
    if len(q.strip()) < 3:
        raise HTTPException(
            status_code=400, detail="Search term must be at least 3 characters"
        )
    config = _get_validator(request).config
    customers = _get_store(request).search_customers(
        q, match_threshold=config.search_match_threshold
    )
    return CustomerSearchResponse(customers=customers)


@router.get("/customers", response_model=CustomerResponse)
async def find_customer(
    request: Request,
    phone: Optional[str] = Query(default=None),
    customer_id: Optional[str] = Query(default=None, alias="customerId"),
) -> CustomerResponse:
    """Find one customer by exact phone number or customer id."""
    store = _get_store(request)
    if phone:
        customer = store.get_customer_by_phone(phone)
    elif customer_id:
        customer = store.get_customer(customer_id)
    else:
        raise HTTPException(
            status_code=400, detail="Either phone or customerId is required"
        )

    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return CustomerResponse(customer=customer)


@router.get("/customers/{customer_key}", response_model=CustomerResponse)
async def get_customer(customer_key: str, request: Request) -> CustomerResponse:
    customer = _get_store(request).get_customer(customer_key)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return CustomerResponse(customer=customer)
