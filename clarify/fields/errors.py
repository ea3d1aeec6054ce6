"""Errors raised when parsing field values."""


class FieldsError(ValueError):
    """Base class for field parsing errors."""

    default_message = "invalid field value"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class BadCalendarDurationError(FieldsError):
    """Raised for text that is not a year-to-fraction RFC 3339 duration."""

    default_message = "must be RFC 3339 duration in range year to fraction"


class MixedCalendarDurationError(FieldsError):
    """Raised when a calendar duration combines months with a fixed part."""

    default_message = (
        "can not combine month or year components with day or time components"
    )


class BadFixedDurationError(FieldsError):
    """Raised for text that is not a week-to-fraction RFC 3339 duration."""

    default_message = "must be RFC 3339 duration in range week to fraction"