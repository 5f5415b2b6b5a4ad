"""Export dispatch by file extension."""

import logging
from pathlib import Path

from ..models.calendar import Calendar
from ..utils.exceptions import ExportError
from .base import CalendarExporter
from .csv_exporter import CsvExporter
from .ical_exporter import IcalExporter

logger = logging.getLogger(__name__)

EXPORTERS: list[CalendarExporter] = [CsvExporter(), IcalExporter()]


def exporter_for(path: Path) -> CalendarExporter:
    """Pick the exporter matching the file extension."""
    suffix = Path(path).suffix.lower()
    for exporter in EXPORTERS:
        if suffix in exporter.extensions:
            return exporter
    raise ExportError("Unsupported file format. Use .csv or .ical extension.")


def export_calendar(calendar: Calendar, path: Path) -> Path:
    """
    Export a calendar to a file, choosing the format by extension.

    Returns:
        Absolute path of the written file

    Raises:
        ExportError: If the format is unsupported or writing fails
    """
    exporter = exporter_for(path)
    written = exporter.write(calendar, path)
    logger.info(f"Exported calendar '{calendar.name}' to {written}")
    return written
