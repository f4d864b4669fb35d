from drivers.models import Driver, DriverStatus

from ..errors import InvalidArgumentError


class DriverStateException(InvalidArgumentError):
    """Raised when an invalid driver transition is attempted."""
    pass


def handle_trip_assignment(driver: Driver) -> Driver:
    """
    Called once a driver has been chosen for a new trip.
    Only an AVAILABLE driver can take a trip; they become UNAVAILABLE.
    """
    if driver.status != DriverStatus.AVAILABLE:
        raise DriverStateException(f"Driver {driver.id} cannot take a trip while {driver.status.value}")

    driver.status = DriverStatus.UNAVAILABLE
    return driver


def handle_trip_completion(driver: Driver) -> Driver:
    """
    Called after one of the driver's trips has finished.
    The driver goes back to AVAILABLE once nothing is left in progress;
    a driver still running another trip keeps their current status.
    """
    if not driver.in_progress_trips():
        driver.status = DriverStatus.AVAILABLE
    return driver
