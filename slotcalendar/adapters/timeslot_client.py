"""
HTTP client for the provider timeslots service.
"""

import asyncio
import logging
from typing import Any, Dict, Mapping

import requests

from ..config import DataSourceConfig
from ..domain.exceptions import DataSourceError
from ..domain.models import ScheduleSnapshot

logger = logging.getLogger(__name__)


class TimeslotClient:
    """
    Client for the timeslots endpoint.

    Performs a single GET per request. Retries and backoff are left to the
    caller; failures surface as DataSourceError.
    """

    def __init__(self, config: DataSourceConfig):
        """
        Initialize the timeslots client.

        Args:
            config: Endpoint location and request timeout
        """
        self.config = config
        self.headers = {"Accept": "application/json"}

    def fetch_timeslots(self, params: Mapping[str, Any]) -> ScheduleSnapshot:
        """
        Fetch the raw schedule for the requested days.

        Args:
            params: Query parameters (daysToReturn, transportationOption,
                startDate, year, make, model)

        Returns:
            Parsed ScheduleSnapshot

        Raises:
            DataSourceError: If the request fails or the payload is malformed
        """
        url = self.config.get_timeslots_url()
        logger.info("Fetching timeslots from %s", url)

        try:
            response = requests.get(
                url,
                headers=self.headers,
                params=dict(params),
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
            data: Dict[str, Any] = response.json()

        except requests.exceptions.RequestException as e:
            raise DataSourceError(f"Failed to fetch timeslots: {e}") from e

        except ValueError as e:
            raise DataSourceError(f"Timeslots response is not valid JSON: {e}") from e

        snapshot = ScheduleSnapshot.from_payload(data)
        logger.debug(
            "Received %d days at %d minute interval", len(snapshot.dates), snapshot.interval
        )
        return snapshot

    async def get_timeslots(self, params: Mapping[str, Any]) -> ScheduleSnapshot:
        """Fetch timeslots without blocking the event loop."""
        return await asyncio.to_thread(self.fetch_timeslots, params)
