"""Edit specification: the set of property changes to apply to events."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ..utils.date_utils import parse_datetime
from ..utils.exceptions import EventValidationError, MissingFieldError
from .event import EventStatus

EDITABLE_PROPERTIES = ("subject", "start", "end", "description", "location", "status")


class EditSpec(BaseModel):
    """Property changes for an edit; ``None`` means leave the value unchanged."""

    subject: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    description: Optional[str] = None
    location: Optional[str] = None
    status: Optional[EventStatus] = None

    model_config = {"frozen": True}

    @property
    def changes_start(self) -> bool:
        return self.start is not None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in EDITABLE_PROPERTIES)

    @classmethod
    def for_property(cls, name: str, value: str) -> "EditSpec":
        """
        Build a single-property spec from a property name and raw text.

        Args:
            name: One of subject, start, end, description, location, status
            value: Raw value; start/end use YYYY-MM-DDTHH:MM

        Returns:
            EditSpec with only that property set

        Raises:
            EventValidationError: If the property name or value is invalid
        """
        if name is None or value is None:
            raise MissingFieldError("Property name and value are required")
        prop = name.strip().lower()
        if prop in ("start", "end"):
            return cls(**{prop: parse_datetime(value)})
        if prop == "status":
            return cls(status=EventStatus.from_string(value))
        if prop in ("subject", "description", "location"):
            return cls(**{prop: value})
        raise EventValidationError(
            f"Invalid property: {name}. Valid properties are {', '.join(EDITABLE_PROPERTIES)}."
        )
