"""Immutable calendar event data model."""

from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

from ..utils.exceptions import EventValidationError, MissingFieldError

ALL_DAY_START = time(8, 0)
ALL_DAY_END = time(17, 0)


class EventStatus(str, Enum):
    """Event visibility status."""

    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def from_string(cls, value: str) -> "EventStatus":
        """Parse a status name, ignoring case and surrounding whitespace."""
        if value is None:
            raise MissingFieldError("Status cannot be None")
        try:
            return cls(value.strip().lower())
        except ValueError as e:
            raise EventValidationError(
                f"Invalid status '{value}'. Use 'public' or 'private'."
            ) from e

    @property
    def is_private(self) -> bool:
        return self is EventStatus.PRIVATE


class Weekday(str, Enum):
    """Day of week keyed by its single-letter abbreviation (R = Thursday, U = Sunday)."""

    MONDAY = "M"
    TUESDAY = "T"
    WEDNESDAY = "W"
    THURSDAY = "R"
    FRIDAY = "F"
    SATURDAY = "S"
    SUNDAY = "U"

    @property
    def iso_index(self) -> int:
        """Index matching ``date.weekday()`` (Monday is 0)."""
        return list(Weekday).index(self)

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        return list(cls)[day.weekday()]

    @classmethod
    def from_char(cls, char: str) -> "Weekday":
        try:
            return cls(char.upper())
        except ValueError as e:
            raise EventValidationError(f"Invalid weekday abbreviation: {char}") from e

    @classmethod
    def parse(cls, abbreviations: str) -> frozenset["Weekday"]:
        """
        Parse a run of weekday letters.

        Args:
            abbreviations: e.g. "MWF"

        Returns:
            Set of weekdays

        Raises:
            EventValidationError: If the string is blank or has an unknown letter
        """
        if abbreviations is None or not abbreviations.strip():
            raise EventValidationError("Weekday string cannot be empty")
        return frozenset(cls.from_char(c) for c in abbreviations.strip())


class Event(BaseModel):
    """
    Immutable calendar event.

    Uniqueness inside a store is decided by the business key
    (subject, start, end); id, description, location and privacy do not
    take part in it. Times are naive wall-clock values in the owning
    calendar's timezone.
    """

    subject: str
    start: datetime
    end: datetime
    description: Optional[str] = None
    location: Optional[str] = None
    is_private: bool = False

    # Identifiers
    id: UUID = Field(default_factory=uuid4)
    series_id: Optional[UUID] = None

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _require_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            for name in ("subject", "start", "end"):
                if data.get(name) is None:
                    raise MissingFieldError(f"{name.capitalize()} cannot be None")
            if "id" in data and data["id"] is None:
                raise MissingFieldError("Event ID cannot be None")
        return data

    @field_validator("subject")
    @classmethod
    def _strip_subject(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise EventValidationError("Subject cannot be empty")
        return stripped

    @field_validator("start", "end")
    @classmethod
    def _naive_only(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            raise EventValidationError("Event times must be naive local date-times")
        return value

    @model_validator(mode="after")
    def _end_after_start(self) -> "Event":
        if self.end <= self.start:
            raise EventValidationError("End time must be after start time")
        return self

    @classmethod
    def all_day(cls, subject: str, day: date, **fields: Any) -> "Event":
        """Build an 08:00-17:00 event on the given date."""
        return cls(
            subject=subject,
            start=datetime.combine(day, ALL_DAY_START),
            end=datetime.combine(day, ALL_DAY_END),
            **fields,
        )

    @property
    def business_key(self) -> tuple[str, datetime, datetime]:
        return (self.subject, self.start, self.end)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def start_date(self) -> date:
        return self.start.date()

    @property
    def end_date(self) -> date:
        return self.end.date()

    @property
    def is_all_day(self) -> bool:
        """True for a single-date event running exactly 08:00 to 17:00."""
        return (
            self.start.date() == self.end.date()
            and self.start.time() == ALL_DAY_START
            and self.end.time() == ALL_DAY_END
        )

    def with_changes(self, **changes: Any) -> "Event":
        """
        Return a re-validated copy with the given fields replaced.

        The id is always carried over. Passing ``series_id=None`` detaches
        the copy from its series.
        """
        data = self.model_dump()
        data.update(changes)
        data["id"] = self.id
        return Event.model_validate(data)

    def __str__(self) -> str:
        return (
            f"Event[id={self.id}, subject={self.subject}, "
            f"start={self.start.isoformat()}, end={self.end.isoformat()}]"
        )
