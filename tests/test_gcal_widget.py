"""Unit tests for GcalWidget and its configuration."""
import os
from unittest.mock import Mock, patch

import pytest
import requests

from processor.config import STAFF_OUTAGES, STUDENT_SCHEDULE, ScheduleMode, TileConfig
from processor.gcal_widget import GcalWidget

STUDENT_URL = 'https://calendar.example.com/feeds/students/public/full'
STAFF_URL = 'https://calendar.example.com/feeds/staff/public/full'


@pytest.fixture
def config():
    """Tile configuration with room for three lines."""
    return TileConfig(max_per_tile=3, student_url=STUDENT_URL, staff_url=STAFF_URL)


@pytest.fixture
def mock_client(raw_events):
    """Calendar client returning the three fixture events."""
    client = Mock()
    client.fetch_events.return_value = raw_events
    return client


class TestGcalWidget:
    """Test cases for GcalWidget class."""

    def test_student_schedule(self, config, mock_client):
        """Test the student schedule shows only times."""
        widget = GcalWidget(config, mock_client)

        payload = widget.student_schedule()

        mock_client.fetch_events.assert_called_once_with(STUDENT_URL, days_ahead=1)
        assert [entry.label for entry in payload.entries] == ['Stacy', 'Marcus', 'Priya']
        assert payload.entries[0].value == '1:00pm - 2:00pm'
        assert payload.conditional_more_info == ''
        assert payload.error is False

    def test_staff_outages(self, config, mock_client):
        """Test staff outages show weekday, date and times."""
        widget = GcalWidget(config, mock_client)

        payload = widget.staff_outages()

        mock_client.fetch_events.assert_called_once_with(STAFF_URL, days_ahead=10)
        assert len(payload.entries) == 3
        assert payload.entries[0].label == 'Stacy'
        assert payload.entries[0].value.startswith('Thu ')
        assert payload.entries[0].value.endswith(', 1:00pm - 2:00pm')

    def test_student_schedule_truncated(self, mock_client):
        """Test three events on a two line tile."""
        config = TileConfig(max_per_tile=2, student_url=STUDENT_URL, staff_url=STAFF_URL)
        widget = GcalWidget(config, mock_client)

        payload = widget.student_schedule()

        assert len(payload.entries) == 1
        assert payload.conditional_more_info == 'Showing 1 of 3 events'

    def test_student_schedule_empty(self, config):
        """Test the student empty message."""
        client = Mock()
        client.fetch_events.return_value = []
        widget = GcalWidget(config, client)

        payload = widget.student_schedule()

        assert payload.entries == []
        assert payload.conditional_more_info == 'No students in today'
        assert payload.error is False

    def test_staff_outages_empty(self, config):
        """Test the staff empty message."""
        client = Mock()
        client.fetch_events.return_value = []
        widget = GcalWidget(config, client)

        payload = widget.staff_outages()

        assert payload.conditional_more_info == 'No scheduled time off...'

    def test_fetch_error_propagates(self, config):
        """Test fetch failures are left to the caller."""
        client = Mock()
        client.fetch_events.side_effect = requests.ConnectionError('Network error')
        widget = GcalWidget(config, client)

        with pytest.raises(requests.ConnectionError):
            widget.student_schedule()

    def test_unknown_mode_has_no_calendar(self, config, mock_client):
        """Test a mode without a configured calendar is rejected."""
        widget = GcalWidget(config, mock_client)
        mode = ScheduleMode(
            name='parent_pickups',
            hide_dates=True,
            empty_message='No pickups',
            days_ahead=1,
            show_day_of_week=False
        )

        with pytest.raises(ValueError):
            widget.schedule(mode)

        mock_client.fetch_events.assert_not_called()

    def test_calendar_picked_by_mode_name(self, config, mock_client):
        """Test the calendar is picked by mode name."""
        widget = GcalWidget(config, mock_client)
        mode = ScheduleMode(
            name='staff_outages',
            hide_dates=False,
            empty_message='Nobody out',
            days_ahead=3,
            show_day_of_week=False
        )

        widget.schedule(mode)

        mock_client.fetch_events.assert_called_once_with(STAFF_URL, days_ahead=3)


class TestScheduleMode:
    """Test cases for ScheduleMode."""

    def test_by_name(self):
        """Test modes are looked up by name."""
        assert ScheduleMode.by_name('student_schedule') == STUDENT_SCHEDULE
        assert ScheduleMode.by_name('staff_outages') == STAFF_OUTAGES

    def test_by_name_unknown(self):
        """Test an unknown mode name."""
        with pytest.raises(ValueError):
            ScheduleMode.by_name('parent_pickups')

    def test_mode_settings(self):
        """Test the two modes differ only in their parameters."""
        assert STUDENT_SCHEDULE.hide_dates is True
        assert STUDENT_SCHEDULE.days_ahead == 1
        assert STUDENT_SCHEDULE.show_day_of_week is False
        assert STAFF_OUTAGES.hide_dates is False
        assert STAFF_OUTAGES.days_ahead == 10
        assert STAFF_OUTAGES.show_day_of_week is True


class TestTileConfig:
    """Test cases for TileConfig."""

    def test_from_file(self, config_path):
        """Test loading the JSON config file."""
        config = TileConfig.from_file(config_path)

        assert config.max_per_tile == 4
        assert config.student_url.endswith('students%40example.com/public/full')
        assert config.staff_url.endswith('staff%40example.com/public/full')

    def test_from_env(self):
        """Test loading configuration from the environment."""
        env_vars = {
            'MAX_PER_TILE': '6',
            'STUDENT_CALENDAR_URL': STUDENT_URL,
            'STAFF_CALENDAR_URL': STAFF_URL
        }
        with patch.dict(os.environ, env_vars):
            config = TileConfig.from_env()

        assert config == TileConfig(
            max_per_tile=6, student_url=STUDENT_URL, staff_url=STAFF_URL
        )

    def test_from_env_default_capacity(self):
        """Test the default tile capacity."""
        with patch.dict(os.environ, {}, clear=True):
            config = TileConfig.from_env()

        assert config.max_per_tile == 5

    def test_negative_capacity(self):
        """Test a negative tile capacity is rejected."""
        with pytest.raises(ValueError):
            TileConfig(max_per_tile=-1, student_url='', staff_url='')
