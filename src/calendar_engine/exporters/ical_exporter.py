"""iCalendar (RFC 5545) export."""

from datetime import datetime
from typing import Iterable, Optional

import pytz
from icalendar import Calendar as ICalCalendar, Event as ICalEvent

from ..models.calendar import Calendar
from ..models.event import Event
from ..utils.date_utils import to_utc
from .base import CalendarExporter

UID_DOMAIN = "calendar.app"


class IcalExporter(CalendarExporter):
    """Export events as a VCALENDAR with one VEVENT per event."""

    extensions = (".ical", ".ics")

    def __init__(self, stamp: Optional[datetime] = None):
        """
        Args:
            stamp: Fixed DTSTAMP for every event (defaults to now, UTC)
        """
        self.stamp = stamp

    def to_ical(self, events: Iterable[Event], calendar_name: str, timezone: str) -> str:
        """
        Build the iCalendar text for a list of events.

        Args:
            events: Events to export
            calendar_name: Used in PRODID
            timezone: Timezone the naive event times are expressed in

        Returns:
            iCalendar text with CRLF line endings
        """
        vcal = ICalCalendar()
        vcal.add("prodid", f"-//Calendar Engine//{calendar_name}//EN")
        vcal.add("version", "2.0")
        vcal.add("calscale", "GREGORIAN")
        vcal.add("method", "PUBLISH")

        stamp = self.stamp or datetime.now(pytz.utc)
        for event in events:
            vcal.add_component(self._to_vevent(event, timezone, stamp))

        return vcal.to_ical().decode("utf-8")

    def render(self, calendar: Calendar) -> str:
        return self.to_ical(calendar.store.get_all(), calendar.name, calendar.timezone)

    @staticmethod
    def _to_vevent(event: Event, timezone: str, stamp: datetime) -> ICalEvent:
        vevent = ICalEvent()
        vevent.add("uid", f"{event.id}@{UID_DOMAIN}")
        vevent.add("dtstamp", stamp)
        vevent.add("dtstart", to_utc(event.start, timezone))
        vevent.add("dtend", to_utc(event.end, timezone))
        vevent.add("summary", event.subject)
        if event.description is not None:
            vevent.add("description", event.description)
        if event.location is not None:
            vevent.add("location", event.location)
        vevent.add("class", "PRIVATE" if event.is_private else "PUBLIC")
        if event.series_id is not None:
            vevent.add("x-series-id", str(event.series_id))
        return vevent
