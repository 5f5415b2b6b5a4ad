"""Named calendar: a name and timezone bound to one event store."""

import pytz
from pydantic import BaseModel, Field, field_validator

from ..store.event_store import EventStore
from ..utils.date_utils import get_timezone
from ..utils.exceptions import EventValidationError, MissingFieldError


class Calendar(BaseModel):
    """
    Calendar metadata plus the store it exclusively owns.

    Event times inside the store are naive wall-clock values in
    ``timezone``.
    """

    name: str
    timezone: str = "UTC"
    store: EventStore = Field(default_factory=EventStore)

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if value is None:
            raise MissingFieldError("Calendar name cannot be None")
        if not str(value).strip():
            raise EventValidationError("Calendar name cannot be empty")
        return value

    @field_validator("timezone", mode="before")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        return get_timezone(value).zone

    @property
    def tzinfo(self) -> pytz.BaseTzInfo:
        return get_timezone(self.timezone)

    def __str__(self) -> str:
        return f"Calendar{{name='{self.name}', timezone={self.timezone}}}"
