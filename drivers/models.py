"""
Purpose: Core data models for the drivers domain.
What it does:
Defines the structure of a Driver and their status, plus the earnings figures
derived from the driver's completed trips.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from .policy import DriverPolicy, default_driver_policy

if TYPE_CHECKING:
    from trips.models import Trip


class DriverStatus(str, Enum):
    """
    Standardizes the state a driver can be in.
    Record files spell these in upper case.
    """
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"


@dataclass(eq=False)
class Driver:
    """
    A driver known to the registry.

    `trips` is filled in by the registry while linking and grows by one
    every time the driver is dispatched.
    """
    id: int
    name: str
    status: DriverStatus = DriverStatus.AVAILABLE
    vin: Optional[str] = None

    trips: List[Trip] = field(default_factory=list, repr=False)

    @classmethod
    def new(
        cls,
        driver_id: int,
        name: str,
        status: str | DriverStatus = DriverStatus.AVAILABLE,
        vin: Optional[str] = None,
    ) -> Driver:
        if isinstance(status, str) and not isinstance(status, DriverStatus):
            status = DriverStatus(status.strip().upper())

        return cls(id=driver_id, name=name, status=status, vin=vin)

    def in_progress_trips(self) -> List[Trip]:
        return [trip for trip in self.trips if trip.is_in_progress]

    def completed_trips(self) -> List[Trip]:
        return [trip for trip in self.trips if not trip.is_in_progress]

    def average_rating(self) -> float:
        """
        Mean rating over completed trips. A driver with no rated trips scores 0.
        """
        ratings = [trip.rating for trip in self.completed_trips() if trip.rating is not None]
        if not ratings:
            return 0.0
        return sum(ratings) / len(ratings)

    def total_revenue(self, policy: Optional[DriverPolicy] = None) -> float:
        """
        What the driver takes home: the per-trip fee comes off first,
        then the driver keeps their share of the rest.
        """
        policy = policy or default_driver_policy()

        revenue = 0.0
        for trip in self.completed_trips():
            if trip.cost is None:
                continue
            revenue += max(trip.cost - policy.trip_fee, 0.0) * policy.driver_share
        return round(revenue, 2)
