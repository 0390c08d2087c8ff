"""
banktime.calendar
~~~~~~~~~~~~~~~~~

Business-day calendars.  A Calendar is a set of working weekdays plus a set
of holiday dates; it classifies dates, rolls them onto business days, steps
by business days and counts business days in a range.

Basic usage::

    from datetime import date
    from banktime.calendar import Calendar

    cal = Calendar({"holidays": ["1st Jan, 2013"]})     # Mon–Fri by default
    cal.is_business_day(date(2013, 1, 1))               # → False
    cal.add_business_days(date(2012, 12, 31), 2)        # → date(2013, 1, 3)
    cal.business_days_between(date(2013, 1, 1), date(2013, 1, 8))   # → 4

Named calendars are read from YAML files::

    cal = Calendar.load("weekdays")                     # bundled calendar
    cal = Calendar.load("ecb", YamlDirectorySource("/etc/calendars"))

``datetime`` values keep their time of day, and NumPy ``datetime64`` arrays
are accepted everywhere a scalar is::

    import numpy as np
    days = np.array(["2013-01-01", "2013-01-05"], dtype="datetime64[D]")
    cal.roll_forward(days)          # → ['2013-01-02', '2013-01-07']

Public API
----------
Calendar               The main class.
CalendarSource         Strategy interface resolving names to configurations.
YamlDirectorySource    One YAML file per calendar in a directory.
MappingSource          Calendars held in an in-memory mapping.
parse_date             Coerce a string or date-like value to a ``date``.
CalendarError          Base exception for all calendar-related errors.
CalendarNotFoundError  No configuration for a calendar name.
InvalidCalendarError   Bad weekday name, holiday or argument.
"""

from __future__ import annotations

from banktime.calendar._dates import parse_date
from banktime.calendar._exceptions import (
    CalendarError,
    CalendarNotFoundError,
    InvalidCalendarError,
)
from banktime.calendar.calendar import Calendar
from banktime.calendar.sources import CalendarSource, MappingSource, YamlDirectorySource

__all__ = [
    "Calendar",
    "CalendarSource",
    "YamlDirectorySource",
    "MappingSource",
    "parse_date",
    "CalendarError",
    "CalendarNotFoundError",
    "InvalidCalendarError",
]
