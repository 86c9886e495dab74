"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability import resolve_closed_day, resolve_day, resolve_open_day
from .calendar_assembler import (
    CalendarAssembler,
    assemble_calendar,
    create_table_cells,
    get_offset,
)
from .exceptions import (
    DataSourceError,
    InvariantViolation,
    SlotCalendarError,
    ValidationError,
)
from .models import (
    Calendar,
    CalendarTable,
    DaySchedule,
    DayTimeslots,
    FormattedSlot,
    ScheduleSnapshot,
    SlotGrid,
    TimeRange,
    TimeslotRecord,
)
from .quantities import total_qty
from .slot_grid import build_slot_grid
from .time_range_finder import find_time_range

__all__ = [
    "Calendar",
    "CalendarAssembler",
    "CalendarTable",
    "DataSourceError",
    "DaySchedule",
    "DayTimeslots",
    "FormattedSlot",
    "InvariantViolation",
    "ScheduleSnapshot",
    "SlotCalendarError",
    "SlotGrid",
    "TimeRange",
    "TimeslotRecord",
    "ValidationError",
    "assemble_calendar",
    "build_slot_grid",
    "create_table_cells",
    "find_time_range",
    "get_offset",
    "resolve_closed_day",
    "resolve_day",
    "resolve_open_day",
    "total_qty",
]
