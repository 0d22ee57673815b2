"""Activity log recording for customer and transaction changes."""

import uuid
from datetime import datetime
from typing import Any, Optional

from app.models import ActivityEntry
from app.storage.memory import MemoryStore


def record_activity(
    store: MemoryStore,
    action: str,
    entity_type: str,
    entity_id: str,
    description: str,
    timestamp: datetime,
    metadata: Optional[dict[str, Any]] = None,
) -> ActivityEntry:
    entry = ActivityEntry(
        id=str(uuid.uuid4()),
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        description=description,
        metadata=metadata or {},
        timestamp=timestamp,
    )
    store.add_activity(entry)
    return entry
