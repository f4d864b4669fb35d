"""
Purpose: Turns flat record rows into a linked entity graph.
What it does:
- parses every passenger / driver / trip row into typed entities (source order kept)
- resolves each trip's passenger_id / driver_id and wires the back-references
- fails the whole load with DataIntegrityError on the first bad row or dangling key

Rule: Builds fresh collections only. Never touches a live registry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from drivers.models import Driver, DriverStatus
from passengers.models import Passenger
from records.source import RecordSource, RecordSourceError, Row
from trips.models import Trip

from .errors import DataIntegrityError


@dataclass(frozen=True)
class LoadedRecords:
    """
    Output of a load: every entity, linked, in source row order.
    """
    passengers: List[Passenger]
    drivers: List[Driver]
    trips: List[Trip]


def load_records(source: RecordSource) -> LoadedRecords:
    """
    Main loading entry point.

    Reads all three row sets first so a failing source never leaves
    us with half the entities built.
    """
    try:
        passenger_rows = source.passenger_rows()
        driver_rows = source.driver_rows()
        trip_rows = source.trip_rows()
    except RecordSourceError as exc:
        raise DataIntegrityError(str(exc)) from exc

    passengers = [_build_passenger(row, index) for index, row in enumerate(passenger_rows, start=1)]
    drivers = [_build_driver(row, index) for index, row in enumerate(driver_rows, start=1)]

    passengers_by_id = _index_by_id(passengers, "passenger")
    drivers_by_id = _index_by_id(drivers, "driver")

    trips: List[Trip] = []
    trip_ids = set()
    for index, row in enumerate(trip_rows, start=1):
        trip = _build_trip(row, index)

        if trip.id in trip_ids:
            raise DataIntegrityError(f"Duplicate trip id {trip.id} (trip row {index})")
        trip_ids.add(trip.id)

        passenger = passengers_by_id.get(trip.passenger_id)
        if passenger is None:
            raise DataIntegrityError(
                f"Trip {trip.id} references unknown passenger {trip.passenger_id}"
            )

        driver = drivers_by_id.get(trip.driver_id)
        if driver is None:
            raise DataIntegrityError(
                f"Trip {trip.id} references unknown driver {trip.driver_id}"
            )

        trip.passenger = passenger
        trip.driver = driver
        passenger.trips.append(trip)
        driver.trips.append(trip)
        trips.append(trip)

    return LoadedRecords(passengers=passengers, drivers=drivers, trips=trips)


#----------------
# Row -> entity builders
#----------------

def _build_passenger(row: Row, index: int) -> Passenger:
    where = f"passenger row {index}"
    return Passenger(
        id=_required_id(row, "id", where),
        name=_required_text(row, "name", where),
        phone_number=_optional_text(row, "phone_number"),
    )


def _build_driver(row: Row, index: int) -> Driver:
    where = f"driver row {index}"

    if isinstance(row.get("status"), DriverStatus):
        status = row["status"]
    else:
        raw_status = _required_text(row, "status", where)
        try:
            status = DriverStatus(raw_status.upper())
        except ValueError as exc:
            raise DataIntegrityError(f"{where}: unknown driver status {raw_status!r}") from exc

    return Driver.new(
        driver_id=_required_id(row, "id", where),
        name=_required_text(row, "name", where),
        status=status,
        vin=_optional_text(row, "vin"),
    )


def _build_trip(row: Row, index: int) -> Trip:
    where = f"trip row {index}"

    start_time = _parse_timestamp(row.get("start_time"), "start_time", where)
    if start_time is None:
        raise DataIntegrityError(f"{where}: missing required field 'start_time'")
    end_time = _parse_timestamp(row.get("end_time"), "end_time", where)

    if end_time is not None and end_time < start_time:
        raise DataIntegrityError(f"{where}: end_time {end_time} is before start_time {start_time}")

    rating = _parse_rating(row.get("rating"), where)
    cost = _parse_number(row.get("cost"), "cost", where)

    return Trip(
        id=_required_id(row, "id", where),
        passenger_id=_required_id(row, "passenger_id", where),
        driver_id=_required_id(row, "driver_id", where),
        start_time=start_time,
        end_time=end_time,
        cost=cost,
        rating=rating,
    )


def _index_by_id(entities, kind: str) -> Dict[int, Any]:
    indexed: Dict[int, Any] = {}
    for entity in entities:
        if entity.id in indexed:
            raise DataIntegrityError(f"Duplicate {kind} id {entity.id}")
        indexed[entity.id] = entity
    return indexed


#----------------
# Field parsers
#----------------

RELATIVE_TIME_WORDS = {"now", "today", "tomorrow", "yesterday"}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _required_text(row: Row, name: str, where: str) -> str:
    value = row.get(name)
    if _is_blank(value):
        raise DataIntegrityError(f"{where}: missing required field {name!r}")
    return str(value).strip()


def _optional_text(row: Row, name: str) -> Optional[str]:
    value = row.get(name)
    if _is_blank(value):
        return None
    return str(value).strip()


def _required_id(row: Row, name: str, where: str) -> int:
    value = row.get(name)
    if _is_blank(value):
        raise DataIntegrityError(f"{where}: missing required field {name!r}")

    if isinstance(value, bool):
        raise DataIntegrityError(f"{where}: {name} must be an integer, got {value!r}")

    try:
        parsed = int(str(value).strip())
    except ValueError as exc:
        raise DataIntegrityError(f"{where}: {name} must be an integer, got {value!r}") from exc

    if parsed <= 0:
        raise DataIntegrityError(f"{where}: {name} must be positive, got {parsed}")
    return parsed


def _parse_timestamp(value: Any, name: str, where: str) -> Optional[datetime]:
    if _is_blank(value):
        return None

    # pandas reads these as the current clock time; records must carry real stamps
    if isinstance(value, str) and value.strip().lower() in RELATIVE_TIME_WORDS:
        raise DataIntegrityError(f"{where}: {name} must be an actual timestamp, got {value!r}")

    try:
        stamp = pd.to_datetime(value)
    except (ValueError, TypeError, OverflowError) as exc:
        raise DataIntegrityError(f"{where}: unparsable {name} {value!r}") from exc

    if pd.isna(stamp):
        raise DataIntegrityError(f"{where}: unparsable {name} {value!r}")

    # naive stamps are read as UTC so every loaded time compares with every other
    if stamp.tzinfo is None:
        stamp = stamp.tz_localize("UTC")
    return stamp.to_pydatetime()


def _parse_number(value: Any, name: str, where: str) -> Optional[float]:
    if _is_blank(value):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise DataIntegrityError(f"{where}: {name} must be numeric, got {value!r}") from exc

    if not math.isfinite(number):
        raise DataIntegrityError(f"{where}: {name} must be a finite number, got {value!r}")
    return number


def _parse_rating(value: Any, where: str) -> Optional[int]:
    number = _parse_number(value, "rating", where)
    if number is None:
        return None

    if not number.is_integer() or not 1 <= number <= 5:
        raise DataIntegrityError(f"{where}: rating must be a whole number from 1 to 5, got {value!r}")
    return int(number)
