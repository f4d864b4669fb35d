from .models import Passenger

__all__ = ["Passenger"]
