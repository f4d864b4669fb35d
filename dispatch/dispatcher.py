"""
Purpose: The registry / orchestrator (the "glue").
What it does:
Owns every Passenger, Driver and Trip loaded from a record source, answers
lookups, and assigns a driver to each new trip request:

passenger lookup -> candidate filter -> selection -> new Trip -> status flip
"""

from __future__ import annotations

import logging
from datetime import datetime
from numbers import Integral
from typing import Dict, List, Optional, Sequence

from drivers.models import Driver, DriverStatus
from passengers.models import Passenger
from records.csv_source import CsvRecordSource
from records.source import RecordSource
from trips.models import Trip

from .candidate_filter import build_base_candidates
from .errors import NoDriverAvailableError, NotFoundError
from .loader import load_records
from .scoring import select_driver
from .state_machines.driver_state import handle_trip_assignment, handle_trip_completion
from .state_machines.trip_state import complete_trip

logger = logging.getLogger(__name__)


class TripDispatcher:
    """
    In-memory registry of passengers, drivers and trips.

    Built from an explicit record source; there is no default dataset here.
    A failing load raises DataIntegrityError out of the constructor, so a
    half-loaded dispatcher never exists.

    Not thread-safe: a concurrent host must serialize request_trip and
    complete_trip per instance.
    """
    def __init__(self, source: RecordSource):
        self.passengers: List[Passenger] = []
        self.drivers: List[Driver] = []
        self.trips: List[Trip] = []

        self._passengers_by_id: Dict[int, Passenger] = {}
        self._drivers_by_id: Dict[int, Driver] = {}
        self._trips_by_id: Dict[int, Trip] = {}
        self._next_trip_id = 1

        self.load(source)

    @classmethod
    def from_directory(cls, directory: str) -> TripDispatcher:
        return cls(CsvRecordSource(directory))

    def __repr__(self) -> str:
        return (
            f"<TripDispatcher passengers={len(self.passengers)} "
            f"drivers={len(self.drivers)} trips={len(self.trips)}>"
        )

    # --- Loading ---

    def load(self, source: RecordSource) -> None:
        """
        Replace the registry contents with what `source` holds.
        Everything is built and linked off to the side first and only
        swapped in once the whole load has succeeded.
        """
        loaded = load_records(source)

        self.passengers = loaded.passengers
        self.drivers = loaded.drivers
        self.trips = loaded.trips

        self._passengers_by_id = {passenger.id: passenger for passenger in self.passengers}
        self._drivers_by_id = {driver.id: driver for driver in self.drivers}
        self._trips_by_id = {trip.id: trip for trip in self.trips}
        self._next_trip_id = max(self._trips_by_id, default=0) + 1

        logger.info(
            f"Loaded {len(self.passengers)} passengers, {len(self.drivers)} drivers "
            f"and {len(self.trips)} trips from {source!r}"
        )

        for driver in self.find_status_mismatches():
            logger.warning(
                f"Driver {driver.id} is loaded as {driver.status.value} "
                f"with {len(driver.in_progress_trips())} trip(s) in progress"
            )

    # --- Lookups ---

    def find_passenger(self, passenger_id: int) -> Passenger:
        return self._lookup(self._passengers_by_id, passenger_id, "passenger")

    def find_driver(self, driver_id: int) -> Driver:
        return self._lookup(self._drivers_by_id, driver_id, "driver")

    def find_trip(self, trip_id: int) -> Trip:
        return self._lookup(self._trips_by_id, trip_id, "trip")

    def find_available_drivers(self) -> List[Driver]:
        """
        Every AVAILABLE driver, in source order.
        """
        return build_base_candidates(self.drivers)

    def find_status_mismatches(self) -> List[Driver]:
        """
        Drivers whose status disagrees with their trip history:
        UNAVAILABLE with nothing in progress, or AVAILABLE while driving.
        Diagnostics only; loaded statuses are never corrected.
        """
        mismatched = []
        for driver in self.drivers:
            driving = bool(driver.in_progress_trips())
            if driving != (driver.status == DriverStatus.UNAVAILABLE):
                mismatched.append(driver)
        return mismatched

    # --- Dispatch ---

    def select_driver(self, candidates: Sequence[Driver]) -> Driver:
        return select_driver(candidates)

    def request_trip(self, passenger_id: int) -> Trip:
        """
        Assign an available driver to a new trip for `passenger_id`.

        Raises NotFoundError for an unknown passenger and
        NoDriverAvailableError when nobody is AVAILABLE. Both checks run
        before anything is mutated.
        """
        passenger = self.find_passenger(passenger_id)

        candidates = self.find_available_drivers()
        if not candidates:
            raise NoDriverAvailableError(
                f"No available drivers for passenger {passenger_id}'s trip request"
            )

        driver = self.select_driver(candidates)

        trip = Trip.new(self._next_trip_id, passenger, driver)
        handle_trip_assignment(driver)

        self._next_trip_id += 1
        self.trips.append(trip)
        self._trips_by_id[trip.id] = trip
        driver.trips.append(trip)
        passenger.trips.append(trip)

        logger.info(f"Trip {trip.id}: passenger {passenger.id} assigned to driver {driver.id}")
        return trip

    def complete_trip(
        self,
        trip_id: int,
        end_time: Optional[datetime] = None,
        cost: Optional[float] = None,
        rating: Optional[int] = None,
    ) -> Trip:
        """
        Finish an in-progress trip and release its driver if they have
        nothing else running.
        """
        trip = self.find_trip(trip_id)
        complete_trip(trip, end_time=end_time, cost=cost, rating=rating)
        handle_trip_completion(trip.driver)

        logger.info(f"Trip {trip.id} completed; driver {trip.driver.id} is {trip.driver.status.value}")
        return trip

    #----------------
    # Internal helpers
    #----------------
    @staticmethod
    def _lookup(index: Dict[int, object], entity_id: int, kind: str):
        if isinstance(entity_id, bool) or not isinstance(entity_id, Integral) or entity_id <= 0:
            raise NotFoundError(f"Invalid {kind} id: {entity_id!r}")

        entity = index.get(int(entity_id))
        if entity is None:
            raise NotFoundError(f"No {kind} with id {entity_id}")
        return entity
