"""
Purpose: The Record Source contract.
What it does:
Hands back three row sets (passengers, drivers, trips). Each row is a flat
mapping of field name -> primitive value (str / int / float / None).

Sources do not build entities or check foreign keys; that is the registry's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

Row = Dict[str, Any]

PASSENGER_FIELDS = ("id", "name")
DRIVER_FIELDS = ("id", "name", "status")
TRIP_FIELDS = ("id", "driver_id", "passenger_id", "start_time", "end_time", "cost", "rating")


class RecordSourceError(Exception):
    """Custom exception for record source failures (missing file, missing column...)."""
    pass


class RecordSource(Protocol):
    def passenger_rows(self) -> List[Row]: ...

    def driver_rows(self) -> List[Row]: ...

    def trip_rows(self) -> List[Row]: ...


@dataclass
class StaticRecordSource:
    """
    Rows already in memory. Useful for tests and for callers that
    fetch records from somewhere other than CSV files.
    """
    passengers: List[Row] = field(default_factory=list)
    drivers: List[Row] = field(default_factory=list)
    trips: List[Row] = field(default_factory=list)

    def passenger_rows(self) -> List[Row]:
        return [dict(row) for row in self.passengers]

    def driver_rows(self) -> List[Row]:
        return [dict(row) for row in self.drivers]

    def trip_rows(self) -> List[Row]:
        return [dict(row) for row in self.trips]


def clean_value(value: Any) -> Optional[Any]:
    """Blank text cells become None; other text is stripped."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value
