"""Assembles calendar events into the payload shown on a dashboard tile."""
import logging
from datetime import date
from typing import Optional, Sequence

from processor.detail_parser import parse_detail, parse_title
from processor.models import DisplayEntry, RawEvent, SchedulePayload

logger = logging.getLogger(__name__)

DEFAULT_EMPTY_MESSAGE = 'No events'


def build_entry(
    raw_event: RawEvent,
    hide_dates: bool,
    show_day_of_week: bool = False,
    today: Optional[date] = None
) -> DisplayEntry:
    """
    Build a tile entry from a calendar event.

    Args:
        raw_event: Event from the calendar feed
        hide_dates: Show only the times, not the dates
        show_day_of_week: Include the weekday in dates
        today: Date rendered as "Today" (default: current local date)

    Returns:
        DisplayEntry with the first word of the title as label
    """
    parsed = parse_detail(raw_event.details, show_day_of_week, today)

    if hide_dates:
        value = parsed.times
    else:
        # Only add a comma when there is something on both sides
        separator = ', ' if parsed.dates and parsed.times else ''
        value = parsed.dates + separator + parsed.times

    return DisplayEntry(label=parse_title(raw_event.title), value=value)


class ScheduleAssembler:
    """Turns a list of calendar events into a SchedulePayload."""

    def __init__(self, show_day_of_week: bool = False,
                 today: Optional[date] = None):
        """
        Initialize the assembler.

        Args:
            show_day_of_week: Include the weekday in dates
            today: Date rendered as "Today" (default: current local date)
        """
        self.show_day_of_week = show_day_of_week
        self.today = today

    def assemble(
        self,
        raw_items: Sequence[RawEvent],
        max_per_tile: int,
        hide_dates: bool = False,
        empty_message: str = DEFAULT_EMPTY_MESSAGE
    ) -> SchedulePayload:
        """
        Build the tile payload, restricted to what fits on a tile.

        Only max_per_tile lines fit on a tile. When there are more events
        than that, the "Showing N of M events" note takes one of the lines,
        so only max_per_tile - 1 entries are kept.

        Args:
            raw_items: Events in display order
            max_per_tile: Number of lines the tile can show
            hide_dates: Show only the times, not the dates
            empty_message: Note shown when there are no events

        Returns:
            SchedulePayload with entries and conditional_more_info
        """
        if not raw_items:
            logger.info("No events to show")
            return SchedulePayload(
                entries=[],
                conditional_more_info=empty_message,
                error=False
            )

        entries = [
            build_entry(item, hide_dates, self.show_day_of_week, self.today)
            for item in raw_items
        ]

        conditional_more_info = ''
        if len(entries) > max_per_tile:
            shown = max(max_per_tile - 1, 0)
            conditional_more_info = f"Showing {shown} of {len(entries)} events"
            entries = entries[:shown]
            logger.info(conditional_more_info)

        return SchedulePayload(
            entries=entries,
            conditional_more_info=conditional_more_info,
            error=False
        )
