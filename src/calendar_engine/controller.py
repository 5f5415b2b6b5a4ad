"""Run loop reading command lines and executing them against the calendars."""

import logging
from typing import Iterable, Optional

from .calendars.manager import CalendarManager
from .commands.parser import CommandParser
from .utils.exceptions import CalendarEngineError
from .view import ConsoleView

logger = logging.getLogger(__name__)

PROMPT = "Enter commands (type 'exit' to quit):"


class Controller:
    """
    Executes commands line by line until ``exit`` or end of input.

    A failing command is reported through the view and the loop moves on
    to the next line.
    """

    def __init__(
        self,
        manager: CalendarManager,
        view: ConsoleView,
        lines: Iterable[str],
        interactive: bool = True,
        parser: Optional[CommandParser] = None,
    ):
        self.manager = manager
        self.view = view
        self.lines = lines
        self.interactive = interactive
        self.parser = parser or CommandParser()

    def run(self) -> bool:
        """
        Process input until ``exit`` or the input ends.

        Returns:
            True if the session ended with ``exit``
        """
        if self.interactive:
            self.view.display_message(PROMPT)

        for line in self.lines:
            if not line.strip():
                continue
            if self.execute_line(line):
                logger.debug("Session ended by exit command")
                return True

        if not self.interactive:
            self.view.display_error("Commands file must end with 'exit' command")
        return False

    def execute_line(self, line: str) -> bool:
        """Run one command line; returns True if it ends the session."""
        try:
            command = self.parser.parse(line)
            if not command.execute(self.manager, self.view):
                logger.info(f"Command did not succeed: {line.strip()}")
            return command.ends_session
        except CalendarEngineError as e:
            logger.info(f"Command rejected: {e}")
            self.view.display_error(str(e))
        except Exception as e:
            logger.exception(f"Unexpected error running '{line.strip()}'")
            self.view.display_error(f"Command failed: {e}")
        return False
