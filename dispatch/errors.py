"""
Purpose: Error taxonomy for the dispatch registry.
What it does:
Every failure the registry raises derives from DispatchError, so callers can
catch the whole family or pick out the one case they know how to recover from.
"""


class DispatchError(Exception):
    """Base class for all registry errors."""
    pass


class NotFoundError(DispatchError, LookupError):
    """Raised when a lookup by id matches no loaded entity."""
    pass


class NoDriverAvailableError(DispatchError):
    """Raised when a trip is requested while every driver is UNAVAILABLE."""
    pass


class DataIntegrityError(DispatchError, ValueError):
    """
    Raised while loading when a row is malformed or a foreign key
    does not resolve. Fatal to the load.
    """
    pass


class InvalidArgumentError(DispatchError, ValueError):
    """Raised when a caller breaks an operation's contract (e.g. empty candidates)."""
    pass
