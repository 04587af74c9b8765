"""Shared test fixtures and configuration."""
import pytest
from pathlib import Path

from schemas.enums import LogLevel
from schemas.events import ProfileEvent


@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def make_event():
    """Return a builder for ProfileEvents."""
    def _make(message, timestamp, category="application", level=LogLevel.PROFILE):
        return ProfileEvent(message=message, level=level, category=category, timestamp=timestamp)
    return _make


@pytest.fixture
def fixed_clock():
    """Clock that always reads t=100.0."""
    return lambda: 100.0


@pytest.fixture
def nested_events(make_event):
    """A contains B: A runs 0..5, B runs 1..3."""
    return [
        make_event("begin:A", 0.0),
        make_event("begin:B", 1.0),
        make_event("end:B", 3.0),
        make_event("end:A", 5.0),
    ]
