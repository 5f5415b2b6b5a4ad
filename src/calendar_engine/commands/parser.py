"""Text command parser: maps one input line to a Command."""

import logging
import re
from typing import Callable

from ..utils.exceptions import InvalidCommandError
from .base import Command, ExitCommand, strip_quotes
from .calendar_commands import (
    CopyEventCommand,
    CopyEventsBetweenCommand,
    CopyEventsOnDayCommand,
    CreateCalendarCommand,
    EditCalendarCommand,
    UseCalendarCommand,
)
from .event_commands import (
    CreateEventCommand,
    EditEventCommand,
    ExportCommand,
    PrintEventsCommand,
    ShowStatusCommand,
)

logger = logging.getLogger(__name__)

CommandFactory = Callable[[re.Match[str]], Command]


def _pattern(body: str) -> re.Pattern:
    return re.compile(rf"^\s*{body}\s*$", re.IGNORECASE)


def _edit(scope: str) -> CommandFactory:
    def build(m: re.Match[str]) -> Command:
        groups = m.groupdict()
        return EditEventCommand(
            scope=scope,
            prop=groups["prop"],
            subject=strip_quotes(groups["subject"]),
            start=groups["start"],
            end=groups.get("end"),
            value=strip_quotes(groups["value"]),
        )

    return build


# More specific patterns come before the patterns they would otherwise shadow
_RULES: list[tuple[re.Pattern, CommandFactory]] = [
    (_pattern(r"exit"), lambda m: ExitCommand()),
    # Calendars
    (
        _pattern(r"create\s+calendar\s+--name\s+(\S+)\s+--timezone\s+(\S+)"),
        lambda m: CreateCalendarCommand(strip_quotes(m[1]), m[2]),
    ),
    (
        _pattern(r"edit\s+calendar\s+--name\s+(\S+)\s+--property\s+(\S+)\s+(\S+)"),
        lambda m: EditCalendarCommand(strip_quotes(m[1]), m[2], strip_quotes(m[3])),
    ),
    (
        _pattern(r"use\s+calendar\s+--name\s+(\S+)"),
        lambda m: UseCalendarCommand(strip_quotes(m[1])),
    ),
    # Copies
    (
        _pattern(r"copy\s+events\s+between\s+(\S+)\s+and\s+(\S+)\s+--target\s+(\S+)\s+to\s+(\S+)"),
        lambda m: CopyEventsBetweenCommand(m[1], m[2], strip_quotes(m[3]), m[4]),
    ),
    (
        _pattern(r"copy\s+events\s+on\s+(\S+)\s+--target\s+(\S+)\s+to\s+(\S+)"),
        lambda m: CopyEventsOnDayCommand(m[1], strip_quotes(m[2]), m[3]),
    ),
    (
        _pattern(r"copy\s+event\s+(.+?)\s+on\s+(\S+)\s+--target\s+(\S+)\s+to\s+(\S+)"),
        lambda m: CopyEventCommand(strip_quotes(m[1]), m[2], strip_quotes(m[3]), m[4]),
    ),
    # Queries
    (_pattern(r"print\s+all\s+events"), lambda m: PrintEventsCommand()),
    (_pattern(r"print\s+events\s+on\s+(\S+)"), lambda m: PrintEventsCommand(on=m[1])),
    (
        _pattern(r"print\s+events\s+from\s+(\S+)\s+to\s+(\S+)"),
        lambda m: PrintEventsCommand(start=m[1], end=m[2]),
    ),
    (_pattern(r"show\s+status\s+on\s+(\S+)"), lambda m: ShowStatusCommand(m[1])),
    # Edits
    (
        _pattern(
            r"edit\s+event\s+(?P<prop>\S+)\s+(?P<subject>.+?)\s+from\s+(?P<start>\S+)"
            r"\s+to\s+(?P<end>\S+)\s+with\s+(?P<value>.+?)"
        ),
        _edit("event"),
    ),
    (
        _pattern(
            r"edit\s+events\s+(?P<prop>\S+)\s+(?P<subject>.+?)\s+from\s+(?P<start>\S+)"
            r"\s+with\s+(?P<value>.+?)"
        ),
        _edit("events"),
    ),
    (
        _pattern(
            r"edit\s+series\s+(?P<prop>\S+)\s+(?P<subject>.+?)\s+from\s+(?P<start>\S+)"
            r"\s+with\s+(?P<value>.+?)"
        ),
        _edit("series"),
    ),
    # Export
    (_pattern(r"export\s+cal\s+(.+?)"), lambda m: ExportCommand(strip_quotes(m[1]))),
    # Event creation, series forms first
    (
        _pattern(
            r"create\s+event\s+(.+?)\s+from\s+(\S+)\s+to\s+(\S+)"
            r"\s+repeats\s+(\S+)\s+for\s+(\d+)\s+times"
        ),
        lambda m: CreateEventCommand(
            strip_quotes(m[1]), m[2], m[3], weekdays=m[4], occurrences=int(m[5])
        ),
    ),
    (
        _pattern(
            r"create\s+event\s+(.+?)\s+from\s+(\S+)\s+to\s+(\S+)"
            r"\s+repeats\s+(\S+)\s+until\s+(\S+)"
        ),
        lambda m: CreateEventCommand(strip_quotes(m[1]), m[2], m[3], weekdays=m[4], until=m[5]),
    ),
    (
        _pattern(r"create\s+event\s+(.+?)\s+on\s+(\S+)\s+repeats\s+(\S+)\s+for\s+(\d+)\s+times"),
        lambda m: CreateEventCommand(
            strip_quotes(m[1]), m[2], weekdays=m[3], occurrences=int(m[4])
        ),
    ),
    (
        _pattern(r"create\s+event\s+(.+?)\s+on\s+(\S+)\s+repeats\s+(\S+)\s+until\s+(\S+)"),
        lambda m: CreateEventCommand(strip_quotes(m[1]), m[2], weekdays=m[3], until=m[4]),
    ),
    (
        _pattern(r"create\s+event\s+(.+?)\s+on\s+(\S+)"),
        lambda m: CreateEventCommand(strip_quotes(m[1]), m[2]),
    ),
    (
        _pattern(r"create\s+event\s+(.+?)\s+from\s+(\S+)\s+to\s+(\S+)"),
        lambda m: CreateEventCommand(strip_quotes(m[1]), m[2], m[3]),
    ),
]


class CommandParser:
    """Tries each command pattern in order and builds the first match."""

    def parse(self, line: str) -> Command:
        """
        Parse one command line.

        Args:
            line: Raw input line

        Returns:
            Command ready to execute

        Raises:
            InvalidCommandError: If no command pattern matches
        """
        if line is None or not line.strip():
            raise InvalidCommandError("Empty command")

        text = line.strip()
        for pattern, factory in _RULES:
            match = pattern.match(text)
            if match:
                command = factory(match)
                logger.debug(f"Parsed '{text}' as {type(command).__name__}")
                return command

        raise InvalidCommandError(f"Invalid command: {text}")
