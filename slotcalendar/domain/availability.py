"""
Per-day availability resolution against the slot grid.
"""

import logging
from datetime import timedelta
from typing import List, Tuple

import pendulum
from pendulum import DateTime

from .models import DaySchedule, FormattedSlot, SlotGrid

logger = logging.getLogger(__name__)


def slot_instant(day: DaySchedule, slot_time: str, offset: float) -> DateTime:
    """
    Absolute instant of a slot.

    The grid time is read as UTC wall time on the day's date, then shifted by
    the provider's offset (hours from UTC) to get the real instant.
    """
    wall_time = pendulum.parse(f"{day.date.to_date_string()}T{slot_time}:00Z")
    return wall_time - timedelta(hours=offset)


def resolve_closed_day(grid: SlotGrid, day: DaySchedule) -> Tuple[FormattedSlot, ...]:
    """Mark every grid slot of a closed day as unavailable."""
    return tuple(
        FormattedSlot.create(time=slot, is_avail=False, date=day.date)
        for slot in grid.slot_master
    )


def resolve_open_day(
    grid: SlotGrid,
    day: DaySchedule,
    delivery_date: DateTime,
) -> Tuple[FormattedSlot, ...]:
    """
    Resolve availability of each grid slot on an open day.

    For every grid position:
    1. A record at the master time is available only if its instant is
       strictly after the delivery date.
    2. Otherwise a record at the offset time is available unconditionally;
       the delivery date cutoff is not applied to offset slots.
    3. Otherwise the slot is unavailable.

    Available slots display the record's time, unavailable ones the master time.
    """
    records = day.records_by_time()
    if len(records) < len(day.timeslots or ()):
        logger.warning("Ignoring duplicate slot times on %s", day.date.to_date_string())

    slots: List[FormattedSlot] = []

    for master_time, offset_time in zip(grid.slot_master, grid.slot_master_offset):
        master_record = records.get(master_time)

        if master_record is not None:
            instant = slot_instant(day, master_time, master_record.offset)
            is_avail = instant > delivery_date
            display_time = master_time
        elif offset_time in records:
            is_avail = True
            display_time = offset_time
        else:
            is_avail = False
            display_time = master_time

        slots.append(
            FormattedSlot.create(
                time=display_time,
                is_avail=is_avail,
                date=day.date,
            )
        )

    return tuple(slots)


def resolve_day(
    grid: SlotGrid,
    day: DaySchedule,
    delivery_date: DateTime,
) -> Tuple[FormattedSlot, ...]:
    """Resolve one day, dispatching on whether it is open."""
    if day.is_closed or day.timeslots is None:
        return resolve_closed_day(grid, day)

    return resolve_open_day(grid, day, delivery_date)
