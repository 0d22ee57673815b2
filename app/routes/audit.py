"""Activity log endpoint for compliance review."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Query, Request

from app.models import ActivityEntry
from app.storage.memory import MemoryStore

router = APIRouter(prefix="/api")


def _get_store(request: Request) -> MemoryStore:
    """Retrieve the memory store from application state."""
    return request.app.state.store


@router.get("/audit", response_model=List[ActivityEntry])
async def get_activity_log(
    request: Request,
    entity_id: Optional[str] = Query(default=None, alias="entityId"),
    from_date: Optional[datetime] = Query(default=None, alias="fromDate"),
    to_date: Optional[datetime] = Query(default=None, alias="toDate"),
) -> List[ActivityEntry]:
    """Retrieve activity log entries with optional filters.

    Filters:
      - entityId: exact match on a customer or transaction id
      - fromDate: entries with timestamp >= this value
      - toDate: entries with timestamp <= this value
    """
    store = _get_store(request)
    return store.get_activity_log(
        entity_id=entity_id,
        since=from_date,
        until=to_date,
    )
