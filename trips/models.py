"""
Purpose: Domain models for the Trips capability.
What it does:
- Defines the Trip data structure (id, foreign keys, timestamps, cost, rating)
- Holds back-references to the Passenger and Driver the registry resolved for it

A trip with no end_time is in progress.

Rule: No loading, no dispatch logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from drivers.models import Driver
    from passengers.models import Passenger


@dataclass(eq=False)
class Trip:
    """
    A single ride. Equality is identity; the registry owns every instance.
    """

    id: int
    passenger_id: int
    driver_id: int
    start_time: datetime
    end_time: Optional[datetime] = None

    cost: Optional[float] = None
    rating: Optional[int] = None

    # back-references, resolved at link / creation time
    passenger: Optional[Passenger] = field(default=None, repr=False)
    driver: Optional[Driver] = field(default=None, repr=False)

    @property
    def is_in_progress(self) -> bool:
        return self.end_time is None

    def duration(self) -> Optional[float]:
        """Trip length in seconds, or None while the trip is still running."""
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    @staticmethod # Factory for a freshly requested trip
    def new(trip_id: int, passenger: Passenger, driver: Driver,
            start_time: Optional[datetime] = None) -> Trip:
        return Trip(
            id=trip_id,
            passenger_id=passenger.id,
            driver_id=driver.id,
            start_time=start_time or datetime.now(timezone.utc),
            passenger=passenger,
            driver=driver,
        )
