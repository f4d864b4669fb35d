"""
Purpose: Central configuration for driver earnings.
What it does:

Stores the tunable numbers used when turning trip costs into driver revenue:

TRIP_FEE = 1.65
DRIVER_SHARE = 0.8

Rule: No logic here—just parameters so you can tune without rewriting code.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class DriverPolicy:
    """
    Central configuration for driver earnings.
    """

    # Flat amount the platform keeps from every completed trip
    # before the remainder is split.
    trip_fee: float = 1.65

    # Fraction of the post-fee amount paid to the driver.
    driver_share: float = 0.8

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.trip_fee < 0:
            raise ValueError("trip_fee must be >= 0")

        if not 0 < self.driver_share <= 1:
            raise ValueError("driver_share must be within (0, 1]")


def default_driver_policy() -> DriverPolicy:
    """
    Convenience factory for the default policy.
    """
    p = DriverPolicy()
    p.validate()
    return p
