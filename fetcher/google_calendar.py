"""Client for Google Calendar JSON-C event feeds."""
import logging
import time
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import requests

from processor.models import RawEvent

logger = logging.getLogger(__name__)


class GoogleCalendarClient:
    """Fetches upcoming events from a Google Calendar feed."""

    def __init__(self, timeout: int = 30, max_retries: int = 3):
        """
        Initialize the calendar client.

        Args:
            timeout: HTTP request timeout in seconds (default: 30)
            max_retries: Attempts before giving up (default: 3)

        Raises:
            ValueError: If max_retries is less than 1
        """
        if max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {max_retries}")
        self.timeout = timeout
        self.max_retries = max_retries

    def fetch_events(self, url: str, days_ahead: int = 1) -> List[RawEvent]:
        """
        Fetch events starting between now and midnight days_ahead from now.

        Args:
            url: Calendar feed URL
            days_ahead: Number of days to fetch events for (default: 1)

        Returns:
            List of RawEvent objects, closest first
        """
        logger.info(f"Fetching calendar events for {days_ahead} days ahead")

        params = self.build_params(days_ahead)
        data = self.fetch_calendar(url, params)
        events = self._parse_items(data)

        logger.info(f"Successfully fetched {len(events)} events")
        return events

    def build_params(self, days_ahead: int,
                     now: Optional[datetime] = None) -> Dict[str, str]:
        """
        Build feed query parameters.

        Recurring events are expanded into single events, and only events
        starting between now and the upcoming midnight days_ahead from now
        are returned, ordered by start time.

        Args:
            days_ahead: Number of days to fetch events for
            now: Start of the window (default: current local time)

        Returns:
            Query parameter dict
        """
        now = (now or datetime.now().astimezone()).replace(microsecond=0)
        end = (now + timedelta(days=days_ahead)).replace(
            hour=0, minute=0, second=0
        )

        return {
            'alt': 'jsonc',
            'singleevents': 'true',
            'start-min': now.isoformat(),
            'start-max': end.isoformat(),
            'orderby': 'starttime',
            'sortorder': 'ascending'
        }

    def fetch_calendar(self, url: str, params: Dict[str, str]) -> Dict[str, Any]:
        """
        Fetch the calendar feed with retry logic.

        Args:
            url: Calendar feed URL
            params: Query parameters

        Returns:
            Decoded JSON response

        Raises:
            requests.RequestException: If all retry attempts fail
        """
        base_delay = 1  # seconds

        for attempt in range(self.max_retries):
            try:
                logger.info(
                    f"Fetching calendar feed "
                    f"(attempt {attempt + 1}/{self.max_retries})"
                )
                response = requests.get(url, params=params, timeout=self.timeout)
                response.raise_for_status()
                return response.json()

            except requests.RequestException as e:
                if attempt < self.max_retries - 1:
                    delay = base_delay * (2 ** attempt)
                    logger.warning(
                        f"Request failed (attempt {attempt + 1}/{self.max_retries}): {e}. "
                        f"Retrying in {delay} seconds..."
                    )
                    time.sleep(delay)
                else:
                    logger.error(
                        f"All {self.max_retries} retry attempts failed. Last error: {e}"
                    )
                    raise

    def _parse_items(self, data: Dict[str, Any]) -> List[RawEvent]:
        """
        Convert feed items to RawEvent objects.

        Args:
            data: Decoded feed, shaped {"data": {"items": [...]}}

        Returns:
            List of RawEvent objects, empty when the feed has no items
        """
        items = (data.get('data') or {}).get('items') or []

        return [
            RawEvent(
                title=item.get('title') or '',
                details=item.get('details') or ''
            )
            for item in items
        ]
