"""
Whole-history statistics for the dashboard header.

Nothing here is year-scoped and nothing is cached: every call re-reads the
store. The streak scan is capped at STREAK_LOOKBACK_DAYS distinct days so
its cost does not grow with total history.
"""

from datetime import date
from typing import Optional

from activity.clock import day_bounds, utc_today
from activity.streak import compute_streak
from config import STREAK_LOOKBACK_DAYS
from models.stats import Stats
from store import EventStore


def current_streak(store: EventStore, today: date) -> int:
    days = [date.fromisoformat(d) for d in store.recent_days(STREAK_LOOKBACK_DAYS)]
    return compute_streak(days, today)


def compute_stats(store: EventStore, today: Optional[date] = None) -> Stats:
    if today is None:
        today = utc_today()
    start, end = day_bounds(today)

    return Stats(
        total=store.count(),
        by_source=store.count_by_source(),
        current_streak=current_streak(store, today),
        today=store.count_between(start, end),
    )
