#Purpose: Hard eligibility filtering (rule gates).
#Builds the base candidate set before scoring.
#The only gate today is driver status: a driver is a candidate
#exactly when their status is AVAILABLE. Trip load is not looked at.

#Output: "rule-qualified drivers" (still not ranked), in source order.

from typing import List, Sequence

from drivers.models import Driver, DriverStatus


def build_base_candidates(drivers: Sequence[Driver]) -> List[Driver]:
    """
    Returns only drivers whose status is AVAILABLE, preserving input order.
    """
    return [driver for driver in drivers if driver.status == DriverStatus.AVAILABLE]
