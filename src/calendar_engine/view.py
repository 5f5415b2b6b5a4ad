"""Console output for the command language."""

import sys
from typing import Iterable, Optional, TextIO

from .models.event import Event


class ConsoleView:
    """Writes messages, errors and event listings to a text stream."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out or sys.stdout

    def display_message(self, message: str) -> None:
        self.out.write(f"{message}\n")

    def display_error(self, error: str) -> None:
        self.out.write(f"ERROR: {error}\n")

    def display_events(self, events: Iterable[Event]) -> None:
        events = list(events)
        if not events:
            self.display_message("No events found.")
            return

        for event in events:
            line = (
                f"- {event.subject} starting on {event.start:%Y-%m-%d} at {event.start:%H:%M}, "
                f"ending on {event.end:%Y-%m-%d} at {event.end:%H:%M}"
            )
            if event.location is not None:
                line += f", location: {event.location}"
            self.display_message(line)
