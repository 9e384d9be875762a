"""Configuration for the calendar tile."""
import json
import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_MAX_PER_TILE = 5


@dataclass(frozen=True)
class TileConfig:
    """Read-only settings shared by every schedule call."""
    max_per_tile: int
    student_url: str
    staff_url: str

    def __post_init__(self):
        if self.max_per_tile < 0:
            raise ValueError(
                f"max_per_tile must be >= 0, got {self.max_per_tile}"
            )

    @classmethod
    def from_env(cls) -> 'TileConfig':
        """
        Build configuration from environment variables.

        Reads MAX_PER_TILE (default: 5), STUDENT_CALENDAR_URL and
        STAFF_CALENDAR_URL.

        Returns:
            TileConfig instance
        """
        return cls(
            max_per_tile=int(
                os.environ.get('MAX_PER_TILE', str(DEFAULT_MAX_PER_TILE))
            ),
            student_url=os.environ.get('STUDENT_CALENDAR_URL', ''),
            staff_url=os.environ.get('STAFF_CALENDAR_URL', '')
        )

    @classmethod
    def from_file(cls, path: str) -> 'TileConfig':
        """
        Build configuration from a JSON config file.

        Expected shape:
            {"max_per_tile": 4,
             "google": {"calendar": {"student_url": "...", "staff_url": "..."}}}

        Args:
            path: Path to the JSON file

        Returns:
            TileConfig instance

        Raises:
            KeyError: If a required key is missing
        """
        logger.info(f"Loading tile configuration from {path}")
        with open(path) as config_file:
            data = json.load(config_file)

        calendar = data['google']['calendar']
        return cls(
            max_per_tile=int(data['max_per_tile']),
            student_url=calendar['student_url'],
            staff_url=calendar['staff_url']
        )


@dataclass(frozen=True)
class ScheduleMode:
    """Parameter set for one kind of schedule shown on the tile."""
    name: str
    hide_dates: bool
    empty_message: str
    days_ahead: int
    show_day_of_week: bool

    @classmethod
    def by_name(cls, name: str) -> 'ScheduleMode':
        """
        Look up a mode by its name.

        Raises:
            ValueError: If no mode has that name
        """
        for mode in (STUDENT_SCHEDULE, STAFF_OUTAGES):
            if mode.name == name:
                return mode
        raise ValueError(f"Unknown schedule: {name}")


# Students in today; only the times matter
STUDENT_SCHEDULE = ScheduleMode(
    name='student_schedule',
    hide_dates=True,
    empty_message='No students in today',
    days_ahead=1,
    show_day_of_week=False
)

# Staff time off over the next 10 days
STAFF_OUTAGES = ScheduleMode(
    name='staff_outages',
    hide_dates=False,
    empty_message='No scheduled time off...',
    days_ahead=10,
    show_day_of_week=True
)
