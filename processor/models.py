"""Data models for calendar tile processing."""
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List


@dataclass(frozen=True)
class RawEvent:
    """Event as received from the calendar feed."""
    title: str
    details: str


@dataclass
class ParsedDetail:
    """Dates and times extracted from an event's detail text."""
    dates: str
    times: str


@dataclass
class DisplayEntry:
    """One line of the tile."""
    label: str
    value: str


@dataclass
class SchedulePayload:
    """Payload handed to the tile renderer."""
    entries: List[DisplayEntry] = field(default_factory=list)
    conditional_more_info: str = ''
    error: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert payload to a JSON-serializable dict."""
        return asdict(self)
