"""Commands that create, edit, query and export events of the calendar in use."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..calendars.manager import CalendarManager
from ..exporters.export import export_calendar
from ..models.edit import EditSpec
from ..models.event import Event, Weekday
from ..models.series import EventSeries
from ..store.event_store import EventStore
from ..utils.date_utils import parse_date, parse_datetime
from ..view import ConsoleView
from .base import Command, require_calendar


@dataclass
class CreateEventCommand(Command):
    """
    Create a single event or a series.

    With ``end`` unset, ``start`` is a date and the event is all-day
    (08:00-17:00). With ``weekdays`` set, a series is created that ends
    after ``occurrences`` or on ``until``.
    """

    subject: str
    start: str
    end: Optional[str] = None
    weekdays: Optional[str] = None
    occurrences: Optional[int] = None
    until: Optional[str] = None

    def execute(self, manager: CalendarManager, view: ConsoleView) -> bool:
        store = require_calendar(manager).store
        template = self._template()

        if self.weekdays is None:
            ok = store.create_event(template)
            if ok:
                view.display_message(f"Created event: {self.subject}")
            else:
                view.display_error("Failed to create event: an identical event already exists")
            return ok

        days = Weekday.parse(self.weekdays)
        if self.until is not None:
            series = EventSeries.until(template, days, parse_date(self.until))
        else:
            series = EventSeries.for_count(template, days, self.occurrences)

        ok = store.create_event_series(series)
        if ok:
            view.display_message(f"Created event series: {self.subject}")
        else:
            view.display_error("Failed to create series: duplicate events detected")
        return ok

    def _template(self) -> Event:
        if self.end is None:
            return Event.all_day(self.subject, parse_date(self.start))
        return Event(
            subject=self.subject,
            start=parse_datetime(self.start),
            end=parse_datetime(self.end),
        )


@dataclass
class EditEventCommand(Command):
    """
    Edit one property of an event.

    ``scope`` selects the reach of the edit: ``event`` edits the event
    matched by subject, start and end; ``events`` edits that event and the
    later members of its series; ``series`` edits the whole series. A
    standalone event is edited on its own whatever the scope.
    """

    scope: str
    prop: str
    subject: str
    start: str
    value: str
    end: Optional[str] = None

    def execute(self, manager: CalendarManager, view: ConsoleView) -> bool:
        store = require_calendar(manager).store
        start = parse_datetime(self.start)
        spec = EditSpec.for_property(self.prop, self.value)

        event = self._locate(store, start)
        if event is None:
            view.display_error(f"Event not found: {self.subject} at {self.start}")
            return False

        if self.scope == "events" and event.series_id is not None:
            ok = store.edit_series_from(event.series_id, start.date(), spec)
        elif self.scope == "series" and event.series_id is not None:
            ok = store.edit_entire_series(event.series_id, spec)
        else:
            ok = store.edit_event(event.id, spec)

        noun = {"event": "Event", "events": "Events", "series": "Series"}[self.scope]
        if ok:
            view.display_message(f"{noun} edited successfully")
        else:
            view.display_error("Failed to edit: would create duplicate event")
        return ok

    def _locate(self, store: EventStore, start: datetime) -> Optional[Event]:
        subject = self.subject.strip()
        if self.scope == "event":
            return store.find_by_business_key(subject, start, parse_datetime(self.end))

        candidates = store.get_on_date(start.date()) if self.scope == "events" else store.get_all()
        for event in candidates:
            if event.subject == subject and event.start == start:
                return event

        if self.scope == "series":
            # A series may be addressed by a start that no member has kept
            for event in store.get_all():
                if event.subject == subject and event.series_id is not None:
                    return event
        return None


@dataclass
class PrintEventsCommand(Command):
    """List events on a date, in a date-time range, or all of them."""

    on: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None

    def execute(self, manager: CalendarManager, view: ConsoleView) -> bool:
        store = require_calendar(manager).store
        if self.on is not None:
            events = store.get_on_date(parse_date(self.on))
        elif self.start is not None and self.end is not None:
            events = store.get_in_range(parse_datetime(self.start), parse_datetime(self.end))
        else:
            events = store.get_all()
        view.display_events(events)
        return True


@dataclass
class ShowStatusCommand(Command):
    """Print ``busy`` or ``available`` for a date-time."""

    at: str

    def execute(self, manager: CalendarManager, view: ConsoleView) -> bool:
        store = require_calendar(manager).store
        view.display_message("busy" if store.is_busy(parse_datetime(self.at)) else "available")
        return True


@dataclass
class ExportCommand(Command):
    """Export the calendar in use to .csv or .ical/.ics."""

    filename: str

    def execute(self, manager: CalendarManager, view: ConsoleView) -> bool:
        calendar = require_calendar(manager)
        written = export_calendar(calendar, Path(self.filename))
        view.display_message(f"Calendar exported to: {written}")
        return True
