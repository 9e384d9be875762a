"""Parsers for Google Calendar event titles and detail text."""
import html
import logging
import re
from datetime import date
from typing import List, Optional

from processor.models import ParsedDetail

logger = logging.getLogger(__name__)

WHEN_PATTERN = re.compile(r'(?<=When: )(.*?)(?=<br |$)', re.MULTILINE)
DISALLOWED_CHARS = re.compile(r'[^0-9A-Za-z ,:]')
YEAR_MARKER = ', 20'

# Characters between the start of a date span and its year marker
WEEKDAY_DATE_WIDTH = 10
DATE_WIDTH = 6


def parse_detail(
    raw_detail: Optional[str],
    show_day_of_week: bool = False,
    today: Optional[date] = None
) -> ParsedDetail:
    """
    Parse the event's dates and times out of its detail text.

    Dates come back as "Dec 12 - Dec 13" (or "Mon Dec 12 - Tue Dec 13"
    when show_day_of_week is set), times as "12:13pm - 2pm". Detail text
    without a "When: " segment or without a year yields empty fields.

    Args:
        raw_detail: Detail string from the calendar feed, may contain HTML
        show_day_of_week: Whether date spans include the weekday name
        today: Date rendered as "Today" (default: current local date)

    Returns:
        ParsedDetail with dates and times
    """
    today = today or date.today()
    width = WEEKDAY_DATE_WIDTH if show_day_of_week else DATE_WIDTH

    match = WHEN_PATTERN.search(raw_detail or '')
    detail = match.group(0) if match else ''
    detail = DISALLOWED_CHARS.sub('', detail)

    dates = []
    year_index = detail.find(YEAR_MARKER)
    while year_index != -1:
        dates.append(detail[max(year_index - width, 0):year_index].strip())
        # Single digit days are one character shorter; back off by 9 so the
        # start never runs past the front of the string.
        if year_index >= 10:
            start_index = year_index - 10
        else:
            start_index = max(year_index - 9, 0)
        # Drop the date and its year, leaving times and any later dates
        detail = detail.replace(detail[start_index:year_index + 7], '', 1)
        year_index = detail.find(YEAR_MARKER)

    times = ' - '.join(_split_times(detail))
    dates_text = ' - '.join(_unique(dates))
    dates_text = _mark_today(dates_text, today)

    logger.debug(f"Parsed detail into dates={dates_text!r} times={times!r}")
    return ParsedDetail(dates=dates_text, times=times)


def parse_title(raw_title: Optional[str]) -> str:
    """
    Return the first word of the title, usually a person's first name.

    Example:
        parse_title("Stacy leaving early.") -> "Stacy"

    Args:
        raw_title: Event title, may contain HTML entities

    Returns:
        First word without a trailing period, or '' for an empty title
    """
    if not raw_title:
        return ''

    title = html.unescape(raw_title)
    words = title.split()
    if not words:
        return ''

    first = words[0]
    if first.endswith('.'):
        first = first[:-1]
    return first.strip()


def _split_times(text: str) -> List[str]:
    """Split the leftover time text on 'to', ignoring trailing blanks."""
    parts = re.sub(r'\s', '', text).split('to')
    while parts and not parts[-1]:
        parts.pop()
    return parts


def _unique(items: List[str]) -> List[str]:
    seen = set()
    unique = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


def _mark_today(dates: str, today: date) -> str:
    """Replace today's month and day with 'Today'."""
    today_text = f"{today:%b} {today.day}"
    return re.sub(rf'\b{re.escape(today_text)}\b', 'Today', dates)
