"""Google Calendar tile: student schedule and staff time off."""
import logging
from typing import Optional

from fetcher.google_calendar import GoogleCalendarClient
from processor.config import STAFF_OUTAGES, STUDENT_SCHEDULE, ScheduleMode, TileConfig
from processor.models import SchedulePayload
from processor.schedule_assembler import ScheduleAssembler

logger = logging.getLogger(__name__)


class GcalWidget:
    """Fetches a calendar and formats it for the dashboard tile."""

    def __init__(self, config: TileConfig,
                 client: Optional[GoogleCalendarClient] = None):
        """
        Initialize the widget.

        Args:
            config: Tile configuration
            client: Calendar client (default: GoogleCalendarClient())
        """
        self.config = config
        self.client = client or GoogleCalendarClient()

    def student_schedule(self) -> SchedulePayload:
        """Return the student schedule for today."""
        return self.schedule(STUDENT_SCHEDULE)

    def staff_outages(self) -> SchedulePayload:
        """Return the dates and times staff will be out for the next 10 days."""
        return self.schedule(STAFF_OUTAGES)

    def schedule(self, mode: ScheduleMode) -> SchedulePayload:
        """
        Fetch the calendar for a mode and build its payload.

        Args:
            mode: Which schedule to build

        Returns:
            SchedulePayload for the tile

        Raises:
            ValueError: If no calendar is configured for the mode
            requests.RequestException: If the calendar cannot be fetched
        """
        url = self._url_for(mode)
        logger.info(f"Building {mode.name} from {url}")

        raw_events = self.client.fetch_events(url, days_ahead=mode.days_ahead)

        assembler = ScheduleAssembler(show_day_of_week=mode.show_day_of_week)
        return assembler.assemble(
            raw_events,
            max_per_tile=self.config.max_per_tile,
            hide_dates=mode.hide_dates,
            empty_message=mode.empty_message
        )

    def _url_for(self, mode: ScheduleMode) -> str:
        urls = {
            STUDENT_SCHEDULE.name: self.config.student_url,
            STAFF_OUTAGES.name: self.config.staff_url
        }
        if mode.name not in urls:
            raise ValueError(f"No calendar configured for {mode.name}")
        return urls[mode.name]
