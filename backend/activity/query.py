from typing import Optional

from activity.clock import current_year, parse_timestamp, year_bounds
from models.event import EventOut
from store import EventStore


def events_for_year(
    store: EventStore,
    year: Optional[int] = None,
    source: Optional[str] = None,
) -> list[EventOut]:
    """
    Events whose UTC timestamp falls inside the calendar year, newest first.

    year defaults to the current UTC year. source, when given, must match
    exactly. Returns an empty list when nothing matches.
    """
    if year is None:
        year = current_year()
    start, end = year_bounds(year)

    return [
        EventOut(
            source=row["source"],
            context=row["context"],
            timestamp=parse_timestamp(row["timestamp"]),
            metadata=row["metadata"],
        )
        for row in store.events_between(start, end, source=source)
    ]
