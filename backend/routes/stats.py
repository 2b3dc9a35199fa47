import logging

from fastapi import APIRouter, Depends, HTTPException

from activity.stats import compute_stats
from models.stats import Stats
from routes.deps import get_store
from store import EventStore, StoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats", response_model=Stats)
def get_stats(store: EventStore = Depends(get_store)):
    """Totals, per-source counts, today's count and the current streak over all history."""
    try:
        return compute_stats(store)
    except StoreError:
        logger.exception("Stats query failed")
        raise HTTPException(status_code=500, detail="Database error")
