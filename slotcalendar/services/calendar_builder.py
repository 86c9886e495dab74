"""
Application service for building slot calendars.

The service fetches a schedule snapshot through a timeslots client adapter and
delegates the grid and availability work to the domain-level
``CalendarAssembler``. The client dependency is a simple protocol so the
real HTTP adapter, the mock adapter and test stubs are interchangeable.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol, Union

from ..config import CalendarOptions
from ..domain.calendar_assembler import CalendarAssembler
from ..domain.exceptions import DataSourceError, SlotCalendarError
from ..domain.models import Calendar, ScheduleSnapshot

logger = logging.getLogger(__name__)


class TimeslotClientProtocol(Protocol):
    """Protocol describing the timeslots client behaviour needed by the service."""

    async def get_timeslots(self, params: Mapping[str, Any]) -> ScheduleSnapshot:
        """Return the raw schedule snapshot for the request parameters."""


class CalendarBuilderService:
    """
    Orchestrates schedule retrieval and calendar assembly.

    ``build_calendar`` either returns a complete Calendar or raises exactly one
    SlotCalendarError to the awaiting caller; there are no partial results.
    """

    def __init__(self, timeslot_client: TimeslotClientProtocol) -> None:
        self._timeslot_client = timeslot_client

    async def build_calendar(
        self,
        options: Union[CalendarOptions, Mapping[str, Any]],
    ) -> Calendar:
        """
        Fetch the schedule for the requested days and assemble the calendar.

        Raises:
            ValidationError: If options or the provider interval are invalid
            DataSourceError: If the schedule cannot be fetched or parsed
            InvariantViolation: If the schedule has no slot records at all
        """
        if not isinstance(options, CalendarOptions):
            options = CalendarOptions.from_mapping(options)

        snapshot = await self.fetch_schedule(options)
        return self.assemble(snapshot, options)

    async def fetch_schedule(self, options: CalendarOptions) -> ScheduleSnapshot:
        """Fetch the schedule snapshot for the requested days."""
        params = options.to_request_params()

        try:
            snapshot = await self._timeslot_client.get_timeslots(params)
        except SlotCalendarError:
            raise
        except Exception as e:
            # Adapters should raise DataSourceError; anything else is a transport fault
            raise DataSourceError(f"Timeslot client failed: {e}") from e

        logger.info(
            "Fetched %d days starting %s", len(snapshot.dates), params["startDate"]
        )
        return snapshot

    @staticmethod
    def assemble(snapshot: ScheduleSnapshot, options: CalendarOptions) -> Calendar:
        """Assemble the calendar from an already fetched snapshot."""
        assembler = CalendarAssembler(delivery_date=options.delivery_date)
        return assembler.assemble(snapshot)
