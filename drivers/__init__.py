"""
Drivers domain package.

Public API:
- Domain models: Driver, DriverStatus
- Earnings configuration: DriverPolicy, default_driver_policy
"""
from .models import Driver, DriverStatus
from .policy import DriverPolicy, default_driver_policy

__all__ = ["Driver",
           "DriverStatus",
             "DriverPolicy",
               "default_driver_policy",
               ]
