class CalendarError(Exception):
    """Base class for all calendar-related errors."""


class CalendarNotFoundError(CalendarError, LookupError):
    """No configuration exists for the requested calendar name."""


class InvalidCalendarError(CalendarError, ValueError):
    """A business day, holiday or argument could not be interpreted."""
