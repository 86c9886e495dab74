"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .calendar_builder import CalendarBuilderService, TimeslotClientProtocol

__all__ = ["CalendarBuilderService", "TimeslotClientProtocol"]
