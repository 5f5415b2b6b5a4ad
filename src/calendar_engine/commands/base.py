"""Base class and shared helpers for commands."""

from abc import ABC, abstractmethod

from ..calendars.manager import CalendarManager
from ..models.calendar import Calendar
from ..utils.exceptions import InvalidCommandError
from ..view import ConsoleView


class Command(ABC):
    """A parsed command line ready to run against the calendar manager."""

    ends_session: bool = False

    @abstractmethod
    def execute(self, manager: CalendarManager, view: ConsoleView) -> bool:
        """
        Run the command and report the outcome through the view.

        Args:
            manager: Calendar registry
            view: Output target

        Returns:
            True if the command succeeded

        Raises:
            CalendarEngineError: For invalid input; the controller reports it
        """


class ExitCommand(Command):
    """Ends the session."""

    ends_session = True

    def execute(self, manager: CalendarManager, view: ConsoleView) -> bool:
        return True


def require_calendar(manager: CalendarManager) -> Calendar:
    calendar = manager.current
    if calendar is None:
        raise InvalidCommandError("No calendar selected. Use 'use calendar --name <name>' first.")
    return calendar


def strip_quotes(value: str) -> str:
    """Remove one pair of matching surrounding quotes."""
    stripped = value.strip()
    if len(stripped) >= 2 and stripped[0] == stripped[-1] and stripped[0] in "\"'":
        return stripped[1:-1]
    return stripped
