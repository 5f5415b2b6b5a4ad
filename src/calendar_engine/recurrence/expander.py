"""Expansion of a recurring series into concrete occurrences."""

import logging
from datetime import datetime, timedelta
from uuid import uuid4

from ..models.event import Event
from ..models.series import EventSeries
from ..utils.date_utils import add_years

logger = logging.getLogger(__name__)

DEFAULT_SAFETY_YEARS = 10


def expand_series(series: EventSeries, safety_years: int = DEFAULT_SAFETY_YEARS) -> list[Event]:
    """
    Generate the occurrences of a series in ascending date order.

    Scanning starts on the template's date and walks one day at a time.
    Each scanned date whose weekday is in the series emits one occurrence
    with the template's time of day and duration, a fresh id and the
    series id. Scanning stops when the occurrence count is reached, when
    the scan passes the inclusive end date, or ``safety_years`` after the
    template date, whichever comes first. An empty weekday set therefore
    expands to no occurrences.

    Args:
        series: Series configuration
        safety_years: Hard limit on how far past the template date to scan

    Returns:
        List of occurrences (possibly empty)
    """
    template = series.template
    first_day = template.start.date()
    time_of_day = template.start.time()
    duration = template.duration
    limit = add_years(first_day, safety_years)
    days = {weekday.iso_index for weekday in series.weekdays}

    occurrences: list[Event] = []
    current = first_day
    while current <= limit:
        if series.uses_end_date and current > series.end_date:
            break

        if current.weekday() in days:
            start = datetime.combine(current, time_of_day)
            occurrences.append(
                Event(
                    subject=template.subject,
                    start=start,
                    end=start + duration,
                    description=template.description,
                    location=template.location,
                    is_private=template.is_private,
                    id=uuid4(),
                    series_id=series.series_id,
                )
            )
            if not series.uses_end_date and len(occurrences) >= series.occurrence_count:
                break

        current += timedelta(days=1)

    pattern = "".join(w.value for w in sorted(series.weekdays, key=lambda w: w.iso_index))
    logger.debug(
        f"Expanded series {series.series_id} ({pattern or '-'}) "
        f"into {len(occurrences)} occurrence(s)"
    )
    return occurrences
