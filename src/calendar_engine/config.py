"""Configuration management for the calendar engine."""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .calendars.manager import CalendarManager
from .utils.exceptions import ConfigurationError

load_dotenv()

logger = logging.getLogger(__name__)


class AppConfig(BaseSettings):
    """Application configuration."""

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: Optional[Path] = Field(default=None, validation_alias="LOG_FILE")

    # Calendars
    default_timezone: str = Field(default="UTC", validation_alias="DEFAULT_TIMEZONE")
    calendars_file: Path = Field(
        default=Path("calendars.yaml"), validation_alias="CALENDARS_FILE"
    )

    # Recurrence
    series_safety_years: int = Field(default=10, validation_alias="SERIES_SAFETY_YEARS")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_parse_none_str="",  # Treat empty string as None
    )


class CalendarEntry:
    """One calendar declared in the calendars file."""

    def __init__(self, data: dict[str, Any], default_timezone: str):
        self.name: Optional[str] = data.get("name")
        self.timezone: str = data.get("timezone", default_timezone)


class CalendarsConfig:
    """Calendars to create at startup, loaded from YAML.

    Example::

        calendars:
          - name: Work
            timezone: America/New_York
          - name: Home
        use: Work
    """

    def __init__(self, config_path: Path = Path("calendars.yaml"), default_timezone: str = "UTC"):
        self.calendars: list[CalendarEntry] = []
        self.use: Optional[str] = None

        if config_path.exists():
            try:
                with open(config_path) as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid calendars file {config_path}: {e}") from e

            for entry in data.get("calendars", []) or []:
                self.calendars.append(CalendarEntry(entry, default_timezone))
            self.use = data.get("use")

    @property
    def has_config(self) -> bool:
        return len(self.calendars) > 0

    def apply(self, manager: CalendarManager) -> None:
        """Create the configured calendars and select the one to use."""
        for entry in self.calendars:
            if not entry.name:
                raise ConfigurationError("Every configured calendar needs a name")
            if not manager.create_calendar(entry.name, entry.timezone):
                logger.warning(f"Calendar '{entry.name}' declared more than once")

        if self.use and not manager.use_calendar(self.use):
            raise ConfigurationError(f"Configured calendar '{self.use}' does not exist")


# Global config instance
config = AppConfig()
