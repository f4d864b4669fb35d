from datetime import datetime, timezone
from typing import Optional

from trips.models import Trip

from ..errors import InvalidArgumentError


class TripStateException(InvalidArgumentError):
    """Raised when an invalid trip transition is attempted."""
    pass


def complete_trip(
    trip: Trip,
    end_time: Optional[datetime] = None,
    cost: Optional[float] = None,
    rating: Optional[int] = None,
) -> Trip:
    """
    Closes an in-progress trip.
    Every value is checked before anything is written, so a rejected call leaves the trip untouched.
    """
    if not trip.is_in_progress:
        raise TripStateException(f"Trip {trip.id} already ended at {trip.end_time}")

    end_time = end_time or datetime.now(timezone.utc)
    if end_time.tzinfo is None:
        raise TripStateException("end_time must be timezone-aware")

    if end_time < trip.start_time:
        raise TripStateException(f"Trip {trip.id} cannot end before it started ({trip.start_time})")

    if cost is not None and cost < 0:
        raise TripStateException(f"Trip {trip.id} cost must be >= 0, got {cost}")

    if rating is not None and (isinstance(rating, bool) or not isinstance(rating, int) or rating not in range(1, 6)):
        raise TripStateException(f"Trip {trip.id} rating must be 1 to 5, got {rating}")

    trip.end_time = end_time
    trip.cost = cost
    trip.rating = rating
    return trip
