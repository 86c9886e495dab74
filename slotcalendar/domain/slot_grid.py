"""
Slot grid generation.

The master grid steps from the earliest opening to the latest closing time at
the provider's interval. The offset grid shifts every master slot by half an
interval, which catches providers with shifted hours on some days
(e.g. open 7:00 Mon-Fri but 7:30 on Saturday).
"""

import logging
from datetime import timedelta
from typing import List, Optional

from .exceptions import ValidationError
from .models import TIME_FORMAT, SlotGrid, TimeRange

logger = logging.getLogger(__name__)


def build_slot_grid(time_range: Optional[TimeRange], interval: int) -> SlotGrid:
    """
    Build the master and offset slot sequences.

    Args:
        time_range: Opening window; None produces an empty grid
        interval: Slot interval in minutes

    Returns:
        SlotGrid with equally long master and offset sequences

    Raises:
        ValidationError: If interval is not positive
    """
    if interval <= 0:
        raise ValidationError(f"Slot interval must be greater than zero, got {interval}")

    if time_range is None:
        return SlotGrid()

    step = timedelta(minutes=interval)
    half_step = timedelta(minutes=interval / 2)

    slot_master: List[str] = []
    slot_master_offset: List[str] = []
    cursor = time_range.earliest

    # Stops at the first step past latest; uneven intervals never round to hit it
    while cursor <= time_range.latest:
        slot_master.append(cursor.format(TIME_FORMAT))
        slot_master_offset.append((cursor + half_step).format(TIME_FORMAT))
        cursor = cursor + step

    logger.debug(
        "Built slot grid %s with %d slots at %d minute interval",
        time_range, len(slot_master), interval,
    )

    return SlotGrid(
        slot_master=tuple(slot_master),
        slot_master_offset=tuple(slot_master_offset),
    )
