"""
Mock timeslots client for running without the provider service.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import pendulum

from ..domain.exceptions import DataSourceError
from ..domain.models import ScheduleSnapshot

logger = logging.getLogger(__name__)


class MockTimeslotClient:
    """
    Mock client that simulates the timeslots service.

    Serves the bundled mock_timeslots.json payload (or one passed in), with
    its days moved onto the requested start date and cut to the requested
    number of days.
    """

    def __init__(self, payload: Optional[Mapping[str, Any]] = None):
        """
        Initialize the mock client.

        Args:
            payload: Optional raw payload; defaults to the bundled mock data
        """
        self.payload = dict(payload) if payload is not None else self._load_payload()
        self.requests: list = []

    @staticmethod
    def _load_payload() -> Dict[str, Any]:
        """Load mock payload from JSON file."""
        data_file = Path(__file__).parent / "mock_timeslots.json"

        with open(data_file, "r", encoding="utf-8") as f:
            return json.load(f)

    def fetch_timeslots(self, params: Mapping[str, Any]) -> ScheduleSnapshot:
        """
        Return the mock schedule for the requested days.

        Raises:
            DataSourceError: If startDate is not a YYYY-MM-DD date
        """
        self.requests.append(dict(params))
        days = list(self.payload.get("dates", []))

        start = params.get("startDate")
        if start:
            try:
                start_date = pendulum.from_format(str(start), "YYYY-MM-DD").date()
            except ValueError as e:
                raise DataSourceError(f"Invalid startDate: {start}") from e

            days = [
                {**day, "date": start_date.add(days=index).to_date_string()}
                for index, day in enumerate(days)
            ]

        if params.get("daysToReturn"):
            days = days[: int(params["daysToReturn"])]

        logger.debug("Serving %d mock days", len(days))
        return ScheduleSnapshot.from_payload({**self.payload, "dates": days})

    async def get_timeslots(self, params: Mapping[str, Any]) -> ScheduleSnapshot:
        """Async variant matching the real client."""
        return self.fetch_timeslots(params)
