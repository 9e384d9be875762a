"""Shared fixtures for the calendar tile tests."""
import json
from pathlib import Path

import pytest

from processor.models import RawEvent

FIXTURES_DIR = Path(__file__).parent / 'fixtures'


def load_json_data(name: str) -> dict:
    """Load a JSON fixture from tests/fixtures."""
    with open(FIXTURES_DIR / name) as fixture:
        return json.load(fixture)


@pytest.fixture
def events_response():
    """Calendar feed response with three events."""
    return load_json_data('events.json')


@pytest.fixture
def empty_response():
    """Calendar feed response with no events."""
    return {'data': {'totalResults': 0, 'items': []}}


@pytest.fixture
def raw_events(events_response):
    """RawEvent objects for the three fixture events."""
    return [
        RawEvent(title=item['title'], details=item['details'])
        for item in events_response['data']['items']
    ]


@pytest.fixture
def config_path():
    """Path to a JSON tile config."""
    return str(FIXTURES_DIR / 'config.json')
