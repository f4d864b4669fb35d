from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from trips.models import Trip


@dataclass(eq=False)
class Passenger:
    """
    A rider known to the registry. `trips` is append-only once linked.
    """
    id: int
    name: str
    phone_number: Optional[str] = None

    trips: List[Trip] = field(default_factory=list, repr=False)

    def completed_trips(self) -> List[Trip]:
        return [trip for trip in self.trips if not trip.is_in_progress]

    def net_expenditures(self) -> float:
        # in-progress trips have no cost yet
        return round(sum(trip.cost for trip in self.completed_trips() if trip.cost is not None), 2)

    def total_time_spent(self) -> float:
        """Seconds spent riding, completed trips only."""
        return sum(trip.duration() for trip in self.completed_trips())
