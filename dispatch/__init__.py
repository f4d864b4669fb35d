#Expose the high-level pipeline pieces:
#Candidate filtering (hard rules)
#Scoring / ranking
#TripDispatcher registry (the "one call" entry point)
#Error taxonomy

from .candidate_filter import build_base_candidates
from .scoring import rank_candidates, select_driver
from .dispatcher import TripDispatcher #the registry callers load data into and request trips from
from .errors import (
    DataIntegrityError,
    DispatchError,
    InvalidArgumentError,
    NoDriverAvailableError,
    NotFoundError,
)

__all__ = [
    "build_base_candidates",
    "rank_candidates",
    "select_driver",
    "TripDispatcher",
    "DispatchError",
    "DataIntegrityError",
    "InvalidArgumentError",
    "NoDriverAvailableError",
    "NotFoundError",
]
