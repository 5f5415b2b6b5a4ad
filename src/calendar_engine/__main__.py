"""CLI entry point for the calendar engine."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .calendars.manager import CalendarManager
from .config import CalendarsConfig, config
from .controller import Controller
from .utils.exceptions import CalendarEngineError
from .utils.logging import setup_logging
from .view import ConsoleView


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Calendar Engine - Manage calendars and events from a command language"
    )
    parser.add_argument(
        "--mode",
        required=True,
        choices=["interactive", "headless"],
        type=str.lower,
        help="Read commands from the terminal or from a commands file",
    )
    parser.add_argument(
        "commands_file",
        nargs="?",
        type=Path,
        help="Commands file (required in headless mode)",
    )
    parser.add_argument(
        "--calendars",
        type=Path,
        default=None,
        help="YAML file of calendars to create at startup (default: from CALENDARS_FILE)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)

    # Setup logging
    log_level = "DEBUG" if args.verbose else config.log_level
    logger = setup_logging(level=log_level, log_file=config.log_file)

    if args.mode == "headless" and args.commands_file is None:
        logger.error("Headless mode requires a commands file")
        return 1

    try:
        manager = CalendarManager(safety_years=config.series_safety_years)
        calendars = CalendarsConfig(
            args.calendars or config.calendars_file,
            default_timezone=config.default_timezone,
        )
        if calendars.has_config:
            calendars.apply(manager)
            logger.info(f"Loaded {len(calendars.calendars)} calendar(s) from config")

        view = ConsoleView()
        if args.mode == "interactive":
            Controller(manager, view, sys.stdin, interactive=True).run()
            return 0

        try:
            with open(args.commands_file, encoding="utf-8") as f:
                finished = Controller(manager, view, f, interactive=False).run()
        except OSError as e:
            logger.error(f"Cannot read commands file {args.commands_file}: {e}")
            return 1
        return 0 if finished else 1

    except CalendarEngineError as e:
        logger.error(f"Calendar engine error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
