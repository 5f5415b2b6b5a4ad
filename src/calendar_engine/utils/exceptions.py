"""Custom exceptions for the calendar engine."""


class CalendarEngineError(Exception):
    """Base exception for calendar engine errors."""


class MissingFieldError(CalendarEngineError):
    """Raised when a required argument or field is absent."""


class EventValidationError(CalendarEngineError):
    """Raised when an event, series or edit violates its invariants."""


class InvalidTimezoneError(CalendarEngineError):
    """Raised when a timezone name is not a known IANA zone."""


class InvalidCommandError(CalendarEngineError):
    """Raised when a command line cannot be parsed or executed."""


class ExportError(CalendarEngineError):
    """Raised when exporting a calendar fails."""


class ConfigurationError(CalendarEngineError):
    """Raised when configuration is invalid."""
