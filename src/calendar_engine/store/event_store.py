"""Duplicate-free event store with series registry, scoped edits and queries."""

import logging
from datetime import date, datetime
from typing import Callable, Iterable, Optional
from uuid import UUID

from ..models.edit import EditSpec
from ..models.event import Event
from ..models.series import EventSeries
from ..recurrence.expander import DEFAULT_SAFETY_YEARS, expand_series
from ..utils.exceptions import MissingFieldError

logger = logging.getLogger(__name__)

BusinessKey = tuple[str, datetime, datetime]


def _require(**arguments: object) -> None:
    for name, value in arguments.items():
        if value is None:
            raise MissingFieldError(f"{name} cannot be None")


def _sort_key(event: Event) -> tuple[datetime, datetime, str]:
    return (event.start, event.end, event.subject)


def apply_edit(event: Event, spec: EditSpec, keep_dates: bool = False) -> Event:
    """
    Merge an edit spec over an event.

    A start change without an end change keeps the event's duration. With
    ``keep_dates`` only the time of day of the new start/end is used and
    each is placed on the event's own start/end date, which is how series
    edits move every occurrence's clock time without moving its date.

    Args:
        event: Current event value
        spec: Changes to apply
        keep_dates: Apply start/end as times of day on the event's dates

    Returns:
        New event (same id), or the original if the spec is empty

    Raises:
        EventValidationError: If the merged event is invalid
    """
    if spec.is_empty:
        return event

    changes: dict[str, object] = {}
    new_start = spec.start
    new_end = spec.end
    if keep_dates:
        if new_start is not None:
            new_start = datetime.combine(event.start_date, new_start.time())
        if new_end is not None:
            new_end = datetime.combine(event.end_date, new_end.time())

    if new_start is not None:
        changes["start"] = new_start
        changes["end"] = new_end if new_end is not None else new_start + event.duration
    elif new_end is not None:
        changes["end"] = new_end

    if spec.subject is not None:
        changes["subject"] = spec.subject
    if spec.description is not None:
        changes["description"] = spec.description
    if spec.location is not None:
        changes["location"] = spec.location
    if spec.status is not None:
        changes["is_private"] = spec.status.is_private

    return event.with_changes(**changes)


class EventStore:
    """
    In-memory store for one calendar.

    Holds events keyed by id, a uniqueness index from business key
    (subject, start, end) to id, and the registry of series
    configurations. Every mutation either commits completely or leaves
    the store untouched; collisions and misses are reported as ``False``.
    """

    def __init__(self, safety_years: int = DEFAULT_SAFETY_YEARS):
        """
        Initialize an empty store.

        Args:
            safety_years: Scan limit handed to the recurrence expander
        """
        self.safety_years = safety_years
        self._events: dict[UUID, Event] = {}
        self._index: dict[BusinessKey, UUID] = {}
        self._series: dict[UUID, EventSeries] = {}

    def __len__(self) -> int:
        return len(self._events)

    # ---- creation -------------------------------------------------------

    def create_event(self, event: Event) -> bool:
        """Insert a single event unless its business key is already taken."""
        _require(event=event)
        if event.business_key in self._index or event.id in self._events:
            logger.info(f"Rejected duplicate event '{event.subject}' at {event.start}")
            return False
        self._insert(event)
        logger.debug(f"Created event {event}")
        return True

    def create_event_series(self, series: EventSeries) -> bool:
        """
        Expand a series and insert all of its occurrences, or none of them.

        A series that expands to zero occurrences still succeeds.
        """
        _require(series=series)
        occurrences = expand_series(series, self.safety_years)
        for occurrence in occurrences:
            if occurrence.business_key in self._index:
                logger.info(
                    f"Rejected series {series.series_id}: occurrence "
                    f"'{occurrence.subject}' at {occurrence.start} already exists"
                )
                return False

        for occurrence in occurrences:
            self._insert(occurrence)
        self._series[series.series_id] = series
        logger.debug(f"Created series {series.series_id} with {len(occurrences)} occurrence(s)")
        return True

    def register_series(self, series: EventSeries) -> bool:
        """Register a series configuration for events already in the store."""
        _require(series=series)
        if series.series_id in self._series:
            return False
        self._series[series.series_id] = series
        return True

    # ---- edits ----------------------------------------------------------

    def edit_event(self, event_id: UUID, spec: EditSpec) -> bool:
        """
        Edit one event in place.

        Returns False if the id is unknown or the edited event would collide
        with a different existing event.
        """
        _require(event_id=event_id, spec=spec)
        event = self._events.get(event_id)
        if event is None:
            return False

        modified = apply_edit(event, spec)
        if self._collides(modified, {event.id}):
            logger.info(f"Edit of {event_id} rejected: would duplicate an existing event")
            return False

        self._replace([(event, modified)])
        return True

    def edit_series_from(self, series_id: UUID, from_date: date, spec: EditSpec) -> bool:
        """Edit every member of a series starting on or after from_date."""
        _require(series_id=series_id, from_date=from_date, spec=spec)
        return self._edit_series(series_id, spec, lambda e: e.start_date >= from_date)

    def edit_entire_series(self, series_id: UUID, spec: EditSpec) -> bool:
        """Edit every member of a series."""
        _require(series_id=series_id, spec=spec)
        return self._edit_series(series_id, spec, lambda e: True)

    def _edit_series(
        self,
        series_id: UUID,
        spec: EditSpec,
        selector: Callable[[Event], bool],
    ) -> bool:
        if series_id not in self._series:
            return False

        selected = [e for e in self.series_members(series_id) if selector(e)]
        if not selected:
            return False

        split = spec.changes_start
        rewritten = []
        for event in selected:
            modified = apply_edit(event, spec, keep_dates=True)
            if split:
                modified = modified.with_changes(series_id=None)
            rewritten.append(modified)

        edited_ids = {e.id for e in selected}
        batch_keys: set[BusinessKey] = set()
        for modified in rewritten:
            if modified.business_key in batch_keys or self._collides(modified, edited_ids):
                logger.info(
                    f"Series edit of {series_id} rejected: '{modified.subject}' "
                    f"at {modified.start} would duplicate an existing event"
                )
                return False
            batch_keys.add(modified.business_key)

        self._replace(zip(selected, rewritten))

        if split:
            logger.debug(f"Split {len(selected)} event(s) from series {series_id}")
            if not self.series_members(series_id):
                del self._series[series_id]
        return True

    # ---- queries --------------------------------------------------------

    def get_all(self) -> list[Event]:
        """All events ordered by (start, end)."""
        return sorted(self._events.values(), key=_sort_key)

    def get_on_date(self, day: date) -> list[Event]:
        """Events whose start..end date span includes day."""
        _require(day=day)
        return sorted(
            (e for e in self._events.values() if e.start_date <= day <= e.end_date),
            key=_sort_key,
        )

    def get_in_range(self, range_start: datetime, range_end: datetime) -> list[Event]:
        """Events overlapping the open interval (range_start, range_end)."""
        _require(range_start=range_start, range_end=range_end)
        return sorted(
            (e for e in self._events.values() if e.start < range_end and e.end > range_start),
            key=_sort_key,
        )

    def is_busy(self, at: datetime) -> bool:
        """True if some event covers ``at`` in its half-open [start, end) interval."""
        _require(at=at)
        return any(e.start <= at < e.end for e in self._events.values())

    def find_by_id(self, event_id: UUID) -> Optional[Event]:
        _require(event_id=event_id)
        return self._events.get(event_id)

    def find_by_business_key(
        self, subject: str, start: datetime, end: datetime
    ) -> Optional[Event]:
        _require(subject=subject, start=start, end=end)
        event_id = self._index.get((subject.strip(), start, end))
        return self._events.get(event_id) if event_id else None

    def get_series(self, series_id: UUID) -> Optional[EventSeries]:
        return self._series.get(series_id)

    def series_members(self, series_id: UUID) -> list[Event]:
        """Events currently attached to the series, ordered by start."""
        return sorted(
            (e for e in self._events.values() if e.series_id == series_id),
            key=_sort_key,
        )

    # ---- internals ------------------------------------------------------

    def _collides(self, event: Event, allowed_ids: set[UUID]) -> bool:
        owner = self._index.get(event.business_key)
        return owner is not None and owner not in allowed_ids

    def _insert(self, event: Event) -> None:
        self._events[event.id] = event
        self._index[event.business_key] = event.id

    def _replace(self, pairs: Iterable[tuple[Event, Event]]) -> None:
        pairs = list(pairs)
        for old, _ in pairs:
            del self._index[old.business_key]
            del self._events[old.id]
        for _, new in pairs:
            self._insert(new)
