"""Recurring event series configuration."""

from datetime import date
from typing import Any, Iterable, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, model_validator

from ..utils.exceptions import EventValidationError, MissingFieldError
from .event import Event, Weekday


class EventSeries(BaseModel):
    """
    Recurrence rule for a series of events.

    The template supplies subject, time of day, duration, description,
    location and privacy for every occurrence. Termination is either a
    fixed occurrence count or an inclusive end date, selected by
    ``uses_end_date``; the inactive one must be absent.
    """

    series_id: UUID = Field(default_factory=uuid4)
    template: Event
    weekdays: frozenset[Weekday] = frozenset()
    occurrence_count: Optional[int] = None
    end_date: Optional[date] = None
    uses_end_date: bool = False

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _require_template(cls, data: Any) -> Any:
        if isinstance(data, dict):
            if data.get("template") is None:
                raise MissingFieldError("Series template cannot be None")
            if data.get("weekdays", frozenset()) is None:
                raise MissingFieldError("Series weekdays cannot be None")
        return data

    @model_validator(mode="after")
    def _check_termination(self) -> "EventSeries":
        if self.uses_end_date:
            if self.end_date is None:
                raise EventValidationError("Series using an end date requires end_date")
            if self.occurrence_count is not None:
                raise EventValidationError(
                    "Series cannot have both an end date and an occurrence count"
                )
        else:
            if self.occurrence_count is None:
                raise EventValidationError("Series requires an occurrence count or an end date")
            if self.end_date is not None:
                raise EventValidationError(
                    "Series cannot have both an end date and an occurrence count"
                )
            if self.occurrence_count < 1:
                raise EventValidationError("Occurrence count must be positive")
        return self

    @classmethod
    def for_count(
        cls,
        template: Event,
        weekdays: Iterable[Weekday],
        occurrences: int,
        series_id: Optional[UUID] = None,
    ) -> "EventSeries":
        """Series that stops after a fixed number of occurrences."""
        return cls(
            series_id=series_id or uuid4(),
            template=template,
            weekdays=frozenset(weekdays),
            occurrence_count=occurrences,
            uses_end_date=False,
        )

    @classmethod
    def until(
        cls,
        template: Event,
        weekdays: Iterable[Weekday],
        end_date: date,
        series_id: Optional[UUID] = None,
    ) -> "EventSeries":
        """Series that repeats up to and including end_date."""
        return cls(
            series_id=series_id or uuid4(),
            template=template,
            weekdays=frozenset(weekdays),
            end_date=end_date,
            uses_end_date=True,
        )
