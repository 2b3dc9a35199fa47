import logging
import math
import re
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from activity.ingest import ingest_batch
from activity.query import events_for_year
from models.event import EventOut
from models.stats import IngestResult
from routes.deps import get_store
from store import EventStore, StoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["contributions"])

YEAR_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


# ---------- Request helpers ----------

def _has_non_finite(value: Any) -> bool:
    """NaN/Infinity are accepted by the JSON decoder but are not JSON."""
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite(v) for v in value.values())
    if isinstance(value, list):
        return any(_has_non_finite(v) for v in value)
    return False


def _parse_year(year: Optional[str]) -> Optional[int]:
    """Empty or missing means the current year; anything but a plain integer is rejected."""
    if not year:
        return None
    if not YEAR_PATTERN.fullmatch(year):
        raise HTTPException(status_code=400, detail="Invalid year parameter")
    try:
        return int(year)
    except ValueError:
        # more digits than int() will convert
        raise HTTPException(status_code=400, detail="Invalid year parameter")


# ---------- Endpoints ----------

@router.post("/contributions", response_model=IngestResult, status_code=201)
def post_contributions(
    body: list[dict[str, Any]] = Body(...),
    store: EventStore = Depends(get_store),
):
    """
    Accepts a batch of events from any agent.
    Duplicates and events that fail validation are skipped silently;
    `processed` is the number of events newly stored.
    """
    if _has_non_finite(body):
        raise HTTPException(status_code=400, detail="Invalid JSON: NaN and Infinity are not allowed")

    try:
        processed = ingest_batch(store, body)
    except StoreError:
        logger.exception("Ingestion of %d events failed", len(body))
        raise HTTPException(status_code=500, detail="Database error")

    return IngestResult(processed=processed, message=f"Processed {processed} contributions")


@router.get("/contributions", response_model=list[EventOut])
def get_contributions(
    year: Optional[str] = None,
    source: Optional[str] = None,
    store: EventStore = Depends(get_store),
):
    """
    Returns the events of one calendar year (UTC), newest first.
    An empty or missing year means the current year; an empty source means no filter.
    """
    parsed_year = _parse_year(year)
    try:
        return events_for_year(store, year=parsed_year, source=source or None)
    except StoreError:
        logger.exception("Contribution query failed")
        raise HTTPException(status_code=500, detail="Database error")
