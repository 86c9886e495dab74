"""
Find the global opening window of a schedule.
"""

import logging
from typing import Iterable, List, Optional

from pendulum import DateTime

from .models import DaySchedule, TimeRange, to_reference_datetime

logger = logging.getLogger(__name__)


def find_time_range(dates: Iterable[DaySchedule]) -> Optional[TimeRange]:
    """
    Return the earliest and latest slot time of day across all days.

    Days without slot records are ignored. Closed days that still carry
    records count towards the range, so the grid stays aligned with them.

    Returns:
        TimeRange, or None if no day has any records (empty grid)
    """
    times: List[DateTime] = [
        to_reference_datetime(record.time)
        for day in dates
        if day.timeslots is not None
        for record in day.timeslots
    ]

    if not times:
        logger.debug("No slot records in schedule; time range is empty")
        return None

    return TimeRange(earliest=min(times), latest=max(times))
