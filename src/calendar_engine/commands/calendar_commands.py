"""Commands that manage calendars and copy events between them."""

from dataclasses import dataclass

from ..calendars.manager import CalendarManager
from ..copy.engine import CopyEngine, CopyResult
from ..models.calendar import Calendar
from ..utils.date_utils import parse_date, parse_datetime
from ..utils.exceptions import InvalidCommandError
from ..view import ConsoleView
from .base import Command, require_calendar


@dataclass
class CreateCalendarCommand(Command):
    name: str
    timezone: str

    def execute(self, manager: CalendarManager, view: ConsoleView) -> bool:
        if not manager.create_calendar(self.name, self.timezone):
            view.display_error(f"Calendar '{self.name}' already exists")
            return False
        view.display_message(f"Created calendar: {self.name}")
        return True


@dataclass
class EditCalendarCommand(Command):
    """Change a calendar's ``name`` or ``timezone``."""

    name: str
    prop: str
    value: str

    def execute(self, manager: CalendarManager, view: ConsoleView) -> bool:
        prop = self.prop.lower()
        if prop == "name":
            ok = manager.rename_calendar(self.name, self.value)
        elif prop == "timezone":
            ok = manager.change_timezone(self.name, self.value)
        else:
            raise InvalidCommandError(
                f"Invalid calendar property: {self.prop}. Use 'name' or 'timezone'."
            )

        if ok:
            view.display_message(f"Calendar '{self.name}' updated")
        else:
            view.display_error(f"Failed to edit calendar '{self.name}'")
        return ok


@dataclass
class UseCalendarCommand(Command):
    name: str

    def execute(self, manager: CalendarManager, view: ConsoleView) -> bool:
        if not manager.use_calendar(self.name):
            view.display_error(f"Calendar not found: {self.name}")
            return False
        view.display_message(f"Using calendar: {self.name}")
        return True


def _target(manager: CalendarManager, name: str) -> Calendar:
    calendar = manager.get_calendar(name)
    if calendar is None:
        raise InvalidCommandError(f"Target calendar not found: {name}")
    return calendar


def _report(result: CopyResult, view: ConsoleView) -> bool:
    if result.copied == 0 and result.failed == 0:
        view.display_error("No events found to copy")
        return False

    view.display_message(f"Copied {result.copied} event(s), {result.failed} failed")
    for error in result.errors:
        view.display_error(error)
    return result.success


@dataclass
class CopyEventCommand(Command):
    """Copy one event of the calendar in use to a start time in the target."""

    subject: str
    start: str
    target: str
    target_start: str

    def execute(self, manager: CalendarManager, view: ConsoleView) -> bool:
        source = require_calendar(manager)
        target = _target(manager, self.target)
        ok = CopyEngine().copy_event(
            source,
            self.subject,
            parse_datetime(self.start),
            target,
            parse_datetime(self.target_start),
        )
        if ok:
            view.display_message(f"Copied event '{self.subject}' to {target.name}")
        else:
            view.display_error(f"Failed to copy event '{self.subject}'")
        return ok


@dataclass
class CopyEventsOnDayCommand(Command):
    day: str
    target: str
    target_day: str

    def execute(self, manager: CalendarManager, view: ConsoleView) -> bool:
        source = require_calendar(manager)
        target = _target(manager, self.target)
        result = CopyEngine().copy_events_on_day(
            source, parse_date(self.day), target, parse_date(self.target_day)
        )
        return _report(result, view)


@dataclass
class CopyEventsBetweenCommand(Command):
    first_day: str
    last_day: str
    target: str
    target_day: str

    def execute(self, manager: CalendarManager, view: ConsoleView) -> bool:
        source = require_calendar(manager)
        target = _target(manager, self.target)
        result = CopyEngine().copy_events_between(
            source,
            parse_date(self.first_day),
            parse_date(self.last_day),
            target,
            parse_date(self.target_day),
        )
        return _report(result, view)
