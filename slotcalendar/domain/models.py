"""
Domain models for provider schedules, slot grids and formatted calendar output.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import pendulum
from pendulum import Date, DateTime

from .exceptions import DataSourceError

# Times of day are compared and stepped as instants on a fixed UTC day.
REFERENCE_DAY = "2000-01-01"
TIME_FORMAT = "HH:mm"


def to_reference_datetime(time_of_day: str) -> DateTime:
    """
    Anchor an ``HH:MM`` string on the reference day.

    Raises:
        ValueError: If the string is not a valid time of day
    """
    return pendulum.from_format(
        f"{REFERENCE_DAY} {time_of_day}",
        f"YYYY-MM-DD {TIME_FORMAT}",
        tz="UTC",
    )


def parse_date(value: str) -> Date:
    """Parse an ISO ``YYYY-MM-DD`` date string."""
    return pendulum.from_format(value, "YYYY-MM-DD").date()


@dataclass(frozen=True)
class TimeslotRecord:
    """A provider slot as delivered by the data source."""
    time: str  # HH:MM
    offset: Union[int, float]  # Provider timezone offset in hours from UTC, e.g. -5 or 5.5

    def __post_init__(self):
        # Grid lookups are keyed on zero-padded HH:MM
        if to_reference_datetime(self.time).format(TIME_FORMAT) != self.time:
            raise ValueError(f"Slot time must be zero-padded HH:MM, got {self.time!r}")


@dataclass(frozen=True)
class DaySchedule:
    """
    Raw availability of a single calendar day.

    ``timeslots`` is None when the provider sent no slot data for the day.
    """
    date: Date
    is_closed: bool = False
    timeslots: Optional[Tuple[TimeslotRecord, ...]] = None

    @property
    def has_records(self) -> bool:
        return bool(self.timeslots)

    def records_by_time(self) -> Dict[str, TimeslotRecord]:
        """Map time of day to record, keeping the first record for each time."""
        lookup: Dict[str, TimeslotRecord] = {}
        for record in self.timeslots or ():
            lookup.setdefault(record.time, record)
        return lookup


@dataclass(frozen=True)
class ScheduleSnapshot:
    """
    Immutable snapshot of a data source response.
    """
    interval: int
    dates: Tuple[DaySchedule, ...]
    provider: Any = None
    transportation_options: Any = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ScheduleSnapshot":
        """
        Build a snapshot from the raw JSON payload.

        Payload format:
        {
            "interval": 30,
            "provider": {...},
            "transportationOptions": [...],
            "dates": [
                {
                    "date": "2024-11-25",
                    "isClosed": false,
                    "timeslots": [{"time": "08:00", "offset": -5}, ...] | null
                }
            ]
        }

        Raises:
            DataSourceError: If the payload does not have the expected shape
        """
        if not isinstance(payload, Mapping):
            raise DataSourceError("Schedule payload must be a JSON object.")

        try:
            interval = int(payload["interval"])
            days = tuple(cls._parse_day(day) for day in payload["dates"])
        except (KeyError, TypeError, ValueError) as e:
            raise DataSourceError(f"Malformed schedule payload: {e}") from e

        return cls(
            interval=interval,
            dates=days,
            provider=payload.get("provider"),
            transportation_options=payload.get("transportationOptions"),
        )

    @staticmethod
    def _parse_day(day: Mapping[str, Any]) -> DaySchedule:
        if not isinstance(day, Mapping):
            raise DataSourceError(f"Schedule day must be a JSON object, got {day!r}")

        is_closed = day.get("isClosed", False)
        if not isinstance(is_closed, bool):
            raise DataSourceError(f"isClosed must be true or false, got {is_closed!r}")

        raw_slots = day.get("timeslots")
        timeslots = None
        if raw_slots is not None:
            timeslots = tuple(
                TimeslotRecord(time=slot["time"], offset=_parse_offset(slot["offset"]))
                for slot in raw_slots
            )

        return DaySchedule(
            date=parse_date(day["date"]),
            is_closed=is_closed,
            timeslots=timeslots,
        )


def _parse_offset(value: Any) -> Union[int, float]:
    """Whole-hour offsets stay ints; half-hour zones like -3.5 keep their fraction."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid offset: {value!r}")
    offset = float(value)
    if not math.isfinite(offset):
        raise ValueError(f"Invalid offset: {value!r}")
    return int(offset) if offset.is_integer() else offset


@dataclass(frozen=True)
class TimeRange:
    """
    Earliest opening and latest closing time of day across a schedule.

    Invariant: earliest must not be after latest.
    """
    earliest: DateTime
    latest: DateTime

    def __post_init__(self):
        if self.earliest > self.latest:
            raise ValueError(
                f"Earliest time {self.earliest.format(TIME_FORMAT)} must not be "
                f"after latest time {self.latest.format(TIME_FORMAT)}"
            )

    @classmethod
    def from_times(cls, earliest: str, latest: str) -> "TimeRange":
        return cls(
            earliest=to_reference_datetime(earliest),
            latest=to_reference_datetime(latest),
        )

    def __str__(self) -> str:
        return f"{self.earliest.format(TIME_FORMAT)} - {self.latest.format(TIME_FORMAT)}"


@dataclass(frozen=True)
class SlotGrid:
    """
    Canonical slot times and their half-interval shifted companions.
    """
    slot_master: Tuple[str, ...] = ()
    slot_master_offset: Tuple[str, ...] = ()

    def __post_init__(self):
        if len(self.slot_master) != len(self.slot_master_offset):
            raise ValueError("slot_master and slot_master_offset must have equal length")

    def __len__(self) -> int:
        return len(self.slot_master)


@dataclass(frozen=True)
class FormattedSlot:
    """
    A display-ready calendar cell.
    """
    time: str
    am_pm: str
    civilian_time: str
    is_avail: bool
    date: Date

    @classmethod
    def create(cls, time: str, is_avail: bool, date: Date) -> "FormattedSlot":
        """Format a slot time for display, e.g. ``"13:30"`` -> ``"1:30"`` PM."""
        moment = to_reference_datetime(time)
        return cls(
            time=time,
            am_pm=moment.format("A", locale="en"),
            civilian_time=moment.format("h:mm", locale="en"),
            is_avail=is_avail,
            date=date,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amPM": self.am_pm,
            "time": self.time,
            "civilianTime": self.civilian_time,
            "isAvail": self.is_avail,
            "date": self.date.to_date_string(),
        }


@dataclass(frozen=True)
class DayTimeslots:
    """Resolved slots of one day, one per grid position."""
    date: Date
    timeslots: Tuple[FormattedSlot, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.to_date_string(),
            "timeslots": [slot.to_dict() for slot in self.timeslots],
        }


@dataclass(frozen=True)
class CalendarTable:
    """
    Calendar in table form: one header per day, one body row per slot.
    """
    headers: Tuple[Date, ...]
    body: Tuple[Tuple[FormattedSlot, ...], ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "body": [[slot.to_dict() for slot in row] for row in self.body],
            "headers": [header.to_date_string() for header in self.headers],
        }


@dataclass(frozen=True)
class Calendar:
    """
    Assembled calendar handed back to the caller.
    """
    offset: Union[int, float]
    dates: Tuple[DayTimeslots, ...]
    table_format: CalendarTable
    provider: Any = None
    transportation_options: Any = None
    slot_grid: SlotGrid = field(default_factory=SlotGrid)

    def available_slots(self) -> List[FormattedSlot]:
        """All available slots, day by day."""
        return [
            slot
            for day in self.dates
            for slot in day.timeslots
            if slot.is_avail
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "offset": self.offset,
            "provider": self.provider,
            "transportationOptions": self.transportation_options,
            "dates": [day.to_dict() for day in self.dates],
            "tableFormat": self.table_format.to_dict(),
        }
