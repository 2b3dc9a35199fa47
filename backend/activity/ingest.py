"""
Batch ingestion.

Each raw event is validated on its own; invalid ones and duplicates are
dropped silently and only show up as a lower processed count. The valid
remainder is written in a single transaction, so an infrastructure failure
leaves the store untouched.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from activity.clock import format_timestamp
from models.event import EventIn
from store import EventStore

logger = logging.getLogger(__name__)


def validate_event(raw: Any) -> Optional[EventIn]:
    """Return the parsed event, or None if it can't be stored."""
    try:
        return EventIn.model_validate(raw)
    except ValidationError as exc:
        logger.debug("Rejected event: %s", exc.errors(include_url=False))
        return None


def ingest_batch(store: EventStore, raw_events: list[Any]) -> int:
    """Persist a batch and return how many events were newly stored."""
    rows = []
    for raw in raw_events:
        event = validate_event(raw)
        if event is None:
            continue
        rows.append((event.source, event.context, format_timestamp(event.timestamp), event.metadata))

    processed = store.insert_many(rows)
    logger.info("Received %d events (from %d submitted)", processed, len(raw_events))
    return processed
