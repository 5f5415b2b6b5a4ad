"""
Unit tests for CSV and iCalendar export.
"""

import csv
import io
from datetime import datetime

import pytest
import pytz

from calendar_engine.exporters.csv_exporter import CSV_COLUMNS, CsvExporter, format_time
from calendar_engine.exporters.export import export_calendar, exporter_for
from calendar_engine.exporters.ical_exporter import IcalExporter
from calendar_engine.models.calendar import Calendar
from calendar_engine.utils.exceptions import ExportError


@pytest.fixture
def calendar(make_event):
    cal = Calendar(name="Work", timezone="America/New_York")
    cal.store.create_event(make_event(description="Daily sync", location="Room 1"))
    cal.store.create_event(
        make_event(subject="Offsite", start="2025-06-12T08:00", end="2025-06-12T17:00", is_private=True)
    )
    return cal


class TestCsvExporter:
    """Tests for the CSV layout."""

    @pytest.mark.parametrize(
        "moment, expected",
        [
            (datetime(2025, 6, 10, 9, 5), "9:05 AM"),
            (datetime(2025, 6, 10, 12, 0), "12:00 PM"),
            (datetime(2025, 6, 10, 0, 30), "12:30 AM"),
            (datetime(2025, 6, 10, 23, 45), "11:45 PM"),
        ],
    )
    def test_format_time(self, moment, expected):
        assert format_time(moment) == expected

    def test_rows(self, calendar):
        rows = CsvExporter().to_csv_rows(calendar.store.get_all())
        assert rows == [
            ["Standup", "2025/06/10", "10:00 AM", "2025/06/10", "11:00 AM",
             "False", "Daily sync", "Room 1", "False"],
            ["Offsite", "2025/06/12", "8:00 AM", "2025/06/12", "5:00 PM",
             "True", "", "", "True"],
        ]

    def test_render_has_header(self, calendar):
        parsed = list(csv.reader(io.StringIO(CsvExporter().render(calendar))))
        assert parsed[0] == CSV_COLUMNS
        assert len(parsed) == 3


class TestIcalExporter:
    """Tests for iCalendar output."""

    def test_vevents(self, calendar):
        stamp = pytz.utc.localize(datetime(2025, 6, 1, 12, 0))
        text = IcalExporter(stamp=stamp).render(calendar)
        standup = calendar.store.get_all()[0]

        assert text.startswith("BEGIN:VCALENDAR")
        assert "PRODID:-//Calendar Engine//Work//EN" in text
        assert text.count("BEGIN:VEVENT") == 2
        assert f"UID:{standup.id}@calendar.app" in text
        assert "DTSTART:20250610T140000Z" in text
        assert "DTEND:20250610T150000Z" in text
        assert "SUMMARY:Standup" in text
        assert "LOCATION:Room 1" in text
        assert "CLASS:PRIVATE" in text
        assert "CLASS:PUBLIC" in text

    def test_absent_fields_omitted(self, make_event):
        cal = Calendar(name="Solo")
        cal.store.create_event(make_event())
        text = IcalExporter().render(cal)
        assert "DESCRIPTION" not in text
        assert "LOCATION" not in text
        assert "X-SERIES-ID" not in text


class TestExportCalendar:
    """Tests for extension dispatch and file writing."""

    @pytest.mark.parametrize(
        "name, kind",
        [("out.csv", CsvExporter), ("out.ICS", IcalExporter), ("out.ical", IcalExporter)],
    )
    def test_exporter_for(self, name, kind):
        assert isinstance(exporter_for(name), kind)

    def test_unsupported_extension(self):
        with pytest.raises(ExportError):
            exporter_for("out.txt")

    def test_writes_file(self, calendar, tmp_path):
        written = export_calendar(calendar, tmp_path / "work.csv")
        assert written.is_absolute()
        assert written.read_text(encoding="utf-8").splitlines()[0].startswith("Subject,")

    def test_unwritable_path(self, calendar, tmp_path):
        with pytest.raises(ExportError):
            export_calendar(calendar, tmp_path / "missing" / "work.ics")
