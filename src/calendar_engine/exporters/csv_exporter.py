"""CSV export in the Google Calendar import layout."""

import csv
import io
from datetime import date, datetime
from typing import Iterable

from ..models.calendar import Calendar
from ..models.event import Event
from .base import CalendarExporter

CSV_COLUMNS = [
    "Subject",
    "Start Date",
    "Start Time",
    "End Date",
    "End Time",
    "All Day Event",
    "Description",
    "Location",
    "Private",
]


def format_date(day: date) -> str:
    return day.strftime("%Y/%m/%d")


def format_time(moment: datetime) -> str:
    """12-hour clock without a leading zero, e.g. ``9:05 AM``."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def _flag(value: bool) -> str:
    return "True" if value else "False"


class CsvExporter(CalendarExporter):
    """Export events as CSV rows."""

    extensions = (".csv",)

    def to_csv_rows(self, events: Iterable[Event]) -> list[list[str]]:
        """One row per event, header excluded."""
        return [
            [
                event.subject,
                format_date(event.start_date),
                format_time(event.start),
                format_date(event.end_date),
                format_time(event.end),
                _flag(event.is_all_day),
                event.description or "",
                event.location or "",
                _flag(event.is_private),
            ]
            for event in events
        ]

    def to_csv(self, events: Iterable[Event]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)
        writer.writerows(self.to_csv_rows(events))
        return buffer.getvalue()

    def render(self, calendar: Calendar) -> str:
        return self.to_csv(calendar.store.get_all())
