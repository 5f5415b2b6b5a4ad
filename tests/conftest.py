"""
Pytest configuration and shared fixtures.
Provides reusable events, stores and calendars for all tests.
"""

import io
from datetime import datetime

import pytest

from calendar_engine.calendars.manager import CalendarManager
from calendar_engine.models.event import Event
from calendar_engine.store.event_store import EventStore
from calendar_engine.view import ConsoleView


# ==================== Event Fixtures ====================

@pytest.fixture
def make_event():
    """Factory for events; times are YYYY-MM-DDTHH:MM strings."""

    def _make(subject="Standup", start="2025-06-10T10:00", end="2025-06-10T11:00", **fields):
        return Event(
            subject=subject,
            start=datetime.fromisoformat(start),
            end=datetime.fromisoformat(end),
            **fields,
        )

    return _make


@pytest.fixture
def sample_event(make_event):
    """A one-hour event on Tuesday 2025-06-10."""
    return make_event(description="Daily sync", location="Room 1")


# ==================== Store / Calendar Fixtures ====================

@pytest.fixture
def store():
    """An empty event store."""
    return EventStore()


@pytest.fixture
def manager():
    """Manager with a New York and a Los Angeles calendar; New York in use."""
    mgr = CalendarManager()
    mgr.create_calendar("Work", "America/New_York")
    mgr.create_calendar("Home", "America/Los_Angeles")
    mgr.use_calendar("Work")
    return mgr


@pytest.fixture
def output():
    """Text buffer the console view writes to."""
    return io.StringIO()


@pytest.fixture
def view(output):
    return ConsoleView(out=output)
