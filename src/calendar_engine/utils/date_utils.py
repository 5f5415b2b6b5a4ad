"""Date and time utilities for the calendar engine."""

from datetime import date, datetime, timedelta

import pytz

from .exceptions import EventValidationError, InvalidTimezoneError, MissingFieldError

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%dT%H:%M"


def get_timezone(name: str) -> pytz.BaseTzInfo:
    """
    Resolve an IANA timezone name.

    Args:
        name: Timezone name, e.g. "America/New_York"

    Returns:
        pytz timezone

    Raises:
        InvalidTimezoneError: If the name is not a known zone
    """
    if name is None:
        raise MissingFieldError("Timezone cannot be None")
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise InvalidTimezoneError(
            f"Invalid timezone '{name}'. Use IANA format (e.g., America/New_York)."
        ) from e


def convert_timezone(dt: datetime, from_tz: str, to_tz: str) -> datetime:
    """
    Convert a naive wall-clock time between zones, preserving the instant.

    Example: 14:00 America/New_York -> 11:00 America/Los_Angeles.

    Args:
        dt: Naive datetime expressed in from_tz
        from_tz: Source timezone name
        to_tz: Target timezone name

    Returns:
        Naive datetime expressed in to_tz
    """
    if dt is None:
        raise MissingFieldError("Datetime cannot be None")
    source = get_timezone(from_tz)
    target = get_timezone(to_tz)
    if source.zone == target.zone:
        return dt
    localized = source.localize(dt)
    return localized.astimezone(target).replace(tzinfo=None)


def to_utc(dt: datetime, tz_name: str) -> datetime:
    """Attach tz_name to a naive datetime and convert it to UTC."""
    return get_timezone(tz_name).localize(dt).astimezone(pytz.utc)


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD date."""
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError as e:
        raise EventValidationError(
            f"Invalid date '{value}'. Use YYYY-MM-DD (e.g., 2025-06-10)."
        ) from e


def parse_datetime(value: str) -> datetime:
    """Parse a YYYY-MM-DDTHH:MM date-time."""
    try:
        return datetime.strptime(value.strip(), DATETIME_FORMAT)
    except ValueError as e:
        raise EventValidationError(
            f"Invalid date-time '{value}'. Use YYYY-MM-DDTHH:MM (e.g., 2025-06-10T09:30)."
        ) from e


def add_years(day: date, years: int) -> date:
    """Shift a date by whole years, clamping Feb 29 to Feb 28."""
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)


def days_between(first: date, second: date) -> timedelta:
    """Return the whole-day offset from first to second."""
    return timedelta(days=(second - first).days)
