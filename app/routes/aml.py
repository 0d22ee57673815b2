"""AML reporting queues: PTR filings and goAML export."""

import math

from fastapi import APIRouter, HTTPException, Query, Request

from app.logging_config import get_logger
from app.models import (
    AmlExportRequest,
    AmlExportResponse,
    Pagination,
    TransactionListResponse,
)
from app.services.activity import record_activity
from app.storage.memory import MemoryStore

logger = get_logger(__name__)

router = APIRouter(prefix="/api/aml")


def _get_store(request: Request) -> MemoryStore:
    """Retrieve the memory store from application state."""
    return request.app.state.store


@router.get("/transactions", response_model=TransactionListResponse)
async def list_aml_transactions(
    request: Request,
    queue: str = Query(default="", alias="type"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=500),
) -> TransactionListResponse:
    """List transactions awaiting AML reporting.

    type=ptr returns every transaction flagged for a PTR. type=goaml
    returns export-ready transactions that have not been exported yet.
    """
    store = _get_store(request)
    if queue == "ptr":
        matches = store.list_ptr_transactions()
    elif queue == "goaml":
        matches = store.list_go_aml_pending()
    else:
        raise HTTPException(
            status_code=400, detail='Invalid type parameter. Use "ptr" or "goaml"'
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


@router.post("/transactions/export", response_model=AmlExportResponse)
async def mark_exported(body: AmlExportRequest, request: Request) -> AmlExportResponse:
    """Mark transactions as exported to goAML."""
    if not body.transaction_ids:
        raise HTTPException(status_code=400, detail="Transaction IDs array is required")

    store = _get_store(request)
    now = request.app.state.clock()
    marked = store.mark_go_aml_exported(body.transaction_ids, now)

    for tx_id in marked:
        txn_number = store.get_transaction(tx_id).txn_number
        record_activity(
            store,
            action="GO_AML_EXPORTED",
            entity_type="TRANSACTION",
            entity_id=tx_id,
            description=f"Transaction {txn_number} exported to goAML",
            timestamp=now,
            metadata={"txnNumber": txn_number},
        )
    logger.info(
        "goAML export: %d of %d transaction(s) marked", len(marked), len(body.transaction_ids)
    )

    return AmlExportResponse(
        success=True,
        marked=len(marked),
        message=f"{len(marked)} transaction(s) marked as exported to goAML",
    )
