"""Registry of named calendars and the calendar currently in use."""

import logging
from typing import Optional

from ..models.calendar import Calendar
from ..recurrence.expander import DEFAULT_SAFETY_YEARS
from ..store.event_store import EventStore
from ..utils.date_utils import get_timezone
from ..utils.exceptions import EventValidationError, MissingFieldError

logger = logging.getLogger(__name__)


class CalendarManager:
    """Owns every calendar; names are unique ignoring case."""

    def __init__(self, safety_years: int = DEFAULT_SAFETY_YEARS):
        self.safety_years = safety_years
        self._calendars: dict[str, Calendar] = {}
        self._current: Optional[str] = None

    @property
    def current(self) -> Optional[Calendar]:
        """Calendar in use, or None if none has been selected."""
        if self._current is None:
            return None
        return self._calendars.get(self._current)

    def create_calendar(self, name: str, timezone: str) -> bool:
        """
        Create an empty calendar.

        Args:
            name: Unique calendar name
            timezone: IANA timezone name

        Returns:
            False if a calendar with that name (ignoring case) exists

        Raises:
            EventValidationError: If the name is blank
            InvalidTimezoneError: If the timezone is unknown
        """
        self._check_name(name)
        get_timezone(timezone)
        if self._exists(name):
            return False

        self._calendars[name] = Calendar(
            name=name,
            timezone=timezone,
            store=EventStore(safety_years=self.safety_years),
        )
        logger.info(f"Created calendar '{name}' ({timezone})")
        return True

    def get_calendar(self, name: Optional[str]) -> Optional[Calendar]:
        """Exact-name lookup."""
        if name is None:
            return None
        return self._calendars.get(name)

    def use_calendar(self, name: str) -> bool:
        if self.get_calendar(name) is None:
            return False
        self._current = name
        return True

    def rename_calendar(self, old_name: str, new_name: str) -> bool:
        """Rename a calendar; fails if it is missing or new_name is taken."""
        self._check_name(new_name)
        calendar = self.get_calendar(old_name)
        if calendar is None:
            return False
        if old_name.lower() != new_name.lower() and self._exists(new_name):
            return False

        del self._calendars[old_name]
        self._calendars[new_name] = Calendar(
            name=new_name, timezone=calendar.timezone, store=calendar.store
        )
        if self._current == old_name:
            self._current = new_name
        logger.info(f"Renamed calendar '{old_name}' to '{new_name}'")
        return True

    def change_timezone(self, name: str, timezone: str) -> bool:
        """Change a calendar's timezone; stored events keep their wall-clock times."""
        get_timezone(timezone)
        calendar = self.get_calendar(name)
        if calendar is None:
            return False
        self._calendars[name] = Calendar(
            name=calendar.name, timezone=timezone, store=calendar.store
        )
        logger.info(f"Calendar '{name}' timezone changed to {timezone}")
        return True

    def list_calendars(self) -> list[Calendar]:
        return list(self._calendars.values())

    def _exists(self, name: str) -> bool:
        lowered = name.lower()
        return any(key.lower() == lowered for key in self._calendars)

    @staticmethod
    def _check_name(name: Optional[str]) -> None:
        if name is None:
            raise MissingFieldError("Calendar name cannot be None")
        if not name.strip():
            raise EventValidationError("Calendar name cannot be empty")
