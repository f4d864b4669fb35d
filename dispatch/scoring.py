"""
Purpose: Ranking/selection model (the "who is best" layer).
What it does:
Takes candidates (already eligible) and orders them under a deterministic,
total tie-break policy:

1. Drivers who have never driven come first.
2. Then drivers whose most recent trip ended longest ago (idle longest).
3. Drivers whose trips are all still running come last.
4. Anything still tied keeps input order.

Pure functions: no mutation, no I/O.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from drivers.models import Driver

from .errors import InvalidArgumentError

# Placeholder sort value for groups where the end time does not matter.
_NO_END_TIME = datetime.min.replace(tzinfo=timezone.utc)

NEVER_DROVE = 0
HAS_FINISHED_TRIP = 1
ONLY_IN_PROGRESS = 2


def last_trip_end_time(driver: Driver) -> Optional[datetime]:
    """
    End time of the driver's most recent finished trip (greatest end_time).
    In-progress trips have no end time and are skipped.
    """
    end_times = [trip.end_time for trip in driver.trips if trip.end_time is not None]
    if not end_times:
        return None
    return max(end_times)


def _priority(driver: Driver) -> Tuple[int, datetime]:
    if not driver.trips:
        return (NEVER_DROVE, _NO_END_TIME)

    last_end = last_trip_end_time(driver)
    if last_end is None:
        return (ONLY_IN_PROGRESS, _NO_END_TIME)

    return (HAS_FINISHED_TRIP, last_end)


def rank_candidates(candidates: Sequence[Driver]) -> List[Driver]:
    """
    Returns the candidates best-first. sorted() is stable, so equal
    priorities stay in input order.
    """
    return sorted(candidates, key=_priority)


def select_driver(candidates: Sequence[Driver]) -> Driver:
    """
    Picks the driver who receives the next trip.

    Raises InvalidArgumentError for an empty candidate list; callers are
    expected to check for available drivers first.
    """
    if not candidates:
        raise InvalidArgumentError("select_driver needs at least one candidate driver")

    # min() returns the first of several equal minimums, which is the input-order tie-break
    return min(candidates, key=_priority)
