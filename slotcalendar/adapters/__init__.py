"""
Adapters layer - External integrations (provider timeslots service).
"""

from .mock_timeslot_client import MockTimeslotClient
from .timeslot_client import TimeslotClient

__all__ = ["MockTimeslotClient", "TimeslotClient"]
