#Status transitions for drivers and trips. No lookups, no selection.

from .driver_state import DriverStateException, handle_trip_assignment, handle_trip_completion
from .trip_state import TripStateException, complete_trip

__all__ = [
    "DriverStateException",
    "handle_trip_assignment",
    "handle_trip_completion",
    "TripStateException",
    "complete_trip",
]
