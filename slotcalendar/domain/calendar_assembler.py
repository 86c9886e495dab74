"""
Assembly of resolved days into the calendar returned to callers.

This is pure domain logic: the schedule snapshot is already fetched and
nothing here performs I/O.
"""

import logging
from typing import Sequence, Tuple, Union

from pendulum import DateTime

from .availability import resolve_day
from .exceptions import InvariantViolation
from .models import (
    Calendar,
    CalendarTable,
    DaySchedule,
    DayTimeslots,
    FormattedSlot,
    ScheduleSnapshot,
    SlotGrid,
)
from .slot_grid import build_slot_grid
from .time_range_finder import find_time_range

logger = logging.getLogger(__name__)


class CalendarAssembler:
    """
    Turns a schedule snapshot into a calendar of display-ready slots.

    Algorithm:
    1. Find the earliest and latest slot time over all days
    2. Build the master and offset slot grids for the provider interval
    3. Resolve every day against the grid and the delivery date
    4. Transpose the days into table rows
    """

    def __init__(self, delivery_date: DateTime):
        self.delivery_date = delivery_date

    def assemble(self, snapshot: ScheduleSnapshot) -> Calendar:
        """
        Build the complete calendar for a snapshot.

        Raises:
            ValidationError: If the snapshot interval is not positive
            InvariantViolation: If no day carries slot records
        """
        grid = self.build_grid(snapshot.dates, snapshot.interval)
        days = self.create_timeslots(snapshot.dates, grid)

        calendar = Calendar(
            offset=get_offset(snapshot.dates),
            provider=snapshot.provider,
            transportation_options=snapshot.transportation_options,
            dates=days,
            table_format=CalendarTable(
                headers=tuple(day.date for day in days),
                body=create_table_cells(days),
            ),
            slot_grid=grid,
        )

        logger.debug(
            "Assembled calendar: %d days, %d slot rows, %d available",
            len(days), len(grid), len(calendar.available_slots()),
        )
        return calendar

    @staticmethod
    def build_grid(dates: Sequence[DaySchedule], interval: int) -> SlotGrid:
        """Build the slot grid spanning all days of a schedule."""
        return build_slot_grid(find_time_range(dates), interval)

    def create_timeslots(
        self,
        dates: Sequence[DaySchedule],
        grid: SlotGrid,
    ) -> Tuple[DayTimeslots, ...]:
        """Resolve every day against the grid, keeping input order."""
        return tuple(
            DayTimeslots(
                date=day.date,
                timeslots=resolve_day(grid, day, self.delivery_date),
            )
            for day in dates
        )


def create_table_cells(
    days: Sequence[DayTimeslots],
) -> Tuple[Tuple[FormattedSlot, ...], ...]:
    """
    Transpose resolved days into rows: ``body[row][col]`` is slot ``row`` of day ``col``.

    Raises:
        InvariantViolation: If the days have different slot counts
    """
    if not days:
        return ()

    row_count = len(days[0].timeslots)
    for day in days:
        if len(day.timeslots) != row_count:
            raise InvariantViolation(
                f"Day {day.date.to_date_string()} has {len(day.timeslots)} slots, "
                f"expected {row_count}"
            )

    return tuple(
        tuple(day.timeslots[row] for day in days)
        for row in range(row_count)
    )


def get_offset(dates: Sequence[DaySchedule]) -> Union[int, float]:
    """
    Return the provider timezone offset.

    Taken from the first record of the first day, in input order, that has
    slot records.

    Raises:
        InvariantViolation: If no day has any slot records
    """
    for day in dates:
        if day.has_records:
            return day.timeslots[0].offset

    raise InvariantViolation("Cannot determine provider offset: no day has slot records")


def assemble_calendar(snapshot: ScheduleSnapshot, delivery_date: DateTime) -> Calendar:
    """Shortcut for ``CalendarAssembler(delivery_date).assemble(snapshot)``."""
    return CalendarAssembler(delivery_date=delivery_date).assemble(snapshot)
