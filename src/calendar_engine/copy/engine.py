"""Copying events between calendars."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from ..models.calendar import Calendar
from ..models.event import Event, Weekday
from ..models.series import EventSeries
from ..utils.date_utils import convert_timezone, days_between
from ..utils.exceptions import EventValidationError, MissingFieldError

logger = logging.getLogger(__name__)


@dataclass
class CopyResult:
    """Result of a copy operation."""

    copied: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.copied > 0


class CopyEngine:
    """
    Copies events from one calendar into another.

    Copies are best effort: each event is inserted on its own, so a
    collision partway through leaves earlier copies in place and is only
    tallied in the result.
    """

    def copy_event(
        self,
        source: Calendar,
        subject: str,
        start: datetime,
        target: Calendar,
        target_start: datetime,
    ) -> bool:
        """
        Copy one event to a new start time in the target calendar.

        Args:
            source: Calendar holding the event
            subject: Subject of the event to copy
            start: Start of the event to copy
            target: Destination calendar
            target_start: New start, already in the target calendar's timezone

        Returns:
            False if the event was not found or the copy collides
        """
        if None in (source, subject, start, target, target_start):
            raise MissingFieldError("Copy requires source, subject, start, target and target start")

        event = self._find(source, subject, start)
        if event is None:
            logger.info(f"No event '{subject}' at {start} in '{source.name}'")
            return False

        copy = Event(
            subject=event.subject,
            start=target_start,
            end=target_start + event.duration,
            description=event.description,
            location=event.location,
            is_private=event.is_private,
        )
        return target.store.create_event(copy)

    def copy_events_on_day(
        self,
        source: Calendar,
        day: date,
        target: Calendar,
        target_day: date,
    ) -> CopyResult:
        """
        Copy every event starting on ``day`` to ``target_day``.

        Times are converted to the target timezone keeping the same instant,
        then moved by the whole-day offset from the event's start date to
        ``target_day``. Copies are standalone events.
        """
        if None in (source, day, target, target_day):
            raise MissingFieldError("Copy requires source, day, target and target day")

        result = CopyResult()
        events = [e for e in source.store.get_all() if e.start_date == day]
        if not events:
            logger.info(f"No events on {day} in '{source.name}'")
            return result

        for event in events:
            offset = days_between(event.start_date, target_day)
            self._copy_one(event, source, target, offset, None, result)

        self._log_result(result, source, target)
        return result

    def copy_events_between(
        self,
        source: Calendar,
        first_day: date,
        last_day: date,
        target: Calendar,
        target_first_day: date,
    ) -> CopyResult:
        """
        Copy every event starting within [first_day, last_day].

        Times are converted to the target timezone keeping the same instant
        and moved by the offset between ``first_day`` and
        ``target_first_day``. Series members stay grouped under a fresh
        series id per source series, with a series configuration
        registered in the target calendar.

        Raises:
            EventValidationError: If last_day is before first_day
        """
        if None in (source, first_day, last_day, target, target_first_day):
            raise MissingFieldError("Copy requires source, date range, target and target day")
        if last_day < first_day:
            raise EventValidationError("End date must be on or after start date")

        result = CopyResult()
        events = [
            e for e in source.store.get_all() if first_day <= e.start_date <= last_day
        ]
        if not events:
            logger.info(f"No events between {first_day} and {last_day} in '{source.name}'")
            return result

        offset = days_between(first_day, target_first_day)
        series_map: dict[UUID, UUID] = {}
        copied_members: dict[UUID, list[Event]] = {}
        for event in events:
            new_series_id = None
            if event.series_id is not None:
                new_series_id = series_map.setdefault(event.series_id, uuid4())
            copy = self._copy_one(event, source, target, offset, new_series_id, result)
            if copy is not None and new_series_id is not None:
                copied_members.setdefault(new_series_id, []).append(copy)

        for series_id, members in copied_members.items():
            target.store.register_series(
                EventSeries.for_count(
                    template=members[0],
                    weekdays={Weekday.from_date(m.start_date) for m in members},
                    occurrences=len(members),
                    series_id=series_id,
                )
            )

        self._log_result(result, source, target)
        return result

    @staticmethod
    def _find(calendar: Calendar, subject: str, start: datetime) -> Optional[Event]:
        wanted = subject.strip()
        for event in calendar.store.get_all():
            if event.subject == wanted and event.start == start:
                return event
        return None

    @staticmethod
    def _copy_one(
        event: Event,
        source: Calendar,
        target: Calendar,
        offset: timedelta,
        series_id: Optional[UUID],
        result: CopyResult,
    ) -> Optional[Event]:
        start = convert_timezone(event.start, source.timezone, target.timezone) + offset
        end = convert_timezone(event.end, source.timezone, target.timezone) + offset
        copy = Event(
            subject=event.subject,
            start=start,
            end=end,
            description=event.description,
            location=event.location,
            is_private=event.is_private,
            series_id=series_id,
        )
        if target.store.create_event(copy):
            result.copied += 1
            return copy

        result.failed += 1
        result.errors.append(f"'{event.subject}' at {start} conflicts with an existing event")
        return None

    @staticmethod
    def _log_result(result: CopyResult, source: Calendar, target: Calendar) -> None:
        logger.info(
            f"Copy from '{source.name}' to '{target.name}' complete: "
            f"{result.copied} copied, {result.failed} failed"
        )
