"""Abstract base class for calendar exporters."""

from abc import ABC, abstractmethod
from pathlib import Path

from ..models.calendar import Calendar
from ..utils.exceptions import ExportError


class CalendarExporter(ABC):
    """Abstract base class for calendar exporters."""

    extensions: tuple[str, ...] = ()

    @abstractmethod
    def render(self, calendar: Calendar) -> str:
        """
        Render every event of a calendar.

        Args:
            calendar: Calendar to export

        Returns:
            File contents
        """

    def write(self, calendar: Calendar, path: Path) -> Path:
        """
        Render a calendar and write it to path.

        Args:
            calendar: Calendar to export
            path: Destination file

        Returns:
            Absolute path of the written file

        Raises:
            ExportError: If the file cannot be written
        """
        target = Path(path).expanduser().resolve()
        try:
            target.write_text(self.render(calendar), encoding="utf-8", newline="")
        except OSError as e:
            raise ExportError(f"Failed to export calendar to {target}: {e}") from e
        return target
