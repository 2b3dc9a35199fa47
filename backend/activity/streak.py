"""
Current activity streak.

Walk the distinct active days newest first with a cursor that starts at
today. A day equal to the cursor, or one day before it, extends the streak
and moves the cursor to the day before that one. The first day earlier than
that ends the walk. Days after the cursor (future-dated events) are passed
over.

The one-day allowance applies at every step, not just the first:

    today, yesterday, day before     -> 3
    yesterday, day before            -> 2   (today not logged yet)
    today, two days ago              -> 2   (single gap bridged)
    today, three days ago            -> 1   (two missing days end it)

Downstream consumers should read the number as "days with activity in the
current run, allowing single-day gaps", not as strictly consecutive days.
"""

from datetime import date, timedelta
from typing import Iterable

ONE_DAY = timedelta(days=1)


def compute_streak(days: Iterable[date], today: date) -> int:
    """days must be distinct and sorted newest first."""
    streak = 0
    expected = today

    for day in days:
        if day == expected or day == expected - ONE_DAY:
            streak += 1
            expected = day - ONE_DAY
        elif day < expected:
            break

    return streak
