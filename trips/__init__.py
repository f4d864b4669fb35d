"""
Trips domain package.

Public API:
- Domain model: Trip
"""
from .models import Trip

__all__ = ["Trip"]
