from __future__ import annotations

import operator
from datetime import date, datetime, timedelta
from typing import Any, Union

import numpy as np
from dateutil import parser as _dateparser

from ._exceptions import InvalidCalendarError

DateLike = Union[date, datetime, np.datetime64, "np.ndarray"]

WEEKDAYS: tuple[str, ...] = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")

_FULL_NAMES: tuple[str, ...] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)

_ONE_DAY = np.timedelta64(1, "D")


# ── weekday names ────────────────────────────────────────────────────────────

def normalise_weekday(name: Any) -> str:
    """
    Map a weekday name to its canonical 3-letter lowercase form.

    Matching is case-insensitive and accepts either the abbreviation
    (``"Mon"``) or the full name (``"Monday"``).
    """
    if not isinstance(name, str):
        raise InvalidCalendarError(f"Weekday name must be a string; got {name!r}.")
    key = name.strip().lower()
    if key in WEEKDAYS:
        return key
    if key in _FULL_NAMES:
        return WEEKDAYS[_FULL_NAMES.index(key)]
    raise InvalidCalendarError(f"Not a day of the week: {name!r}.")


# ── parsing ──────────────────────────────────────────────────────────────────

def parse_date(value: Any) -> date:
    """
    Coerce a date-like value to a ``datetime.date``, dropping any time part.

    ISO 8601 strings are read year-first; other strings go through
    ``dateutil`` with day-first ordering, so
    ``"Thu 12/6/2014"`` is the 12th of June and free-form input such as
    ``"9am, Tuesday 1st Jan, 2013"`` is understood.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, np.datetime64):
        if np.isnat(value):
            raise InvalidCalendarError("NaT is not a date.")
        return value.astype("datetime64[D]").item()
    if isinstance(value, str):
        try:
            return _dateparser.isoparse(value).date()
        except ValueError:
            pass
        try:
            return _dateparser.parse(value, dayfirst=True).date()
        except (ValueError, OverflowError) as exc:
            raise InvalidCalendarError(f"Unparseable date: {value!r}.") from exc
    raise InvalidCalendarError(f"Not a date: {value!r}.")


# ── day-precision views of query arguments ───────────────────────────────────

def to_days(value: DateLike) -> np.ndarray:
    """Return the date part of ``value`` as ``datetime64[D]`` (0-d for scalars)."""
    if isinstance(value, datetime):
        return np.datetime64(value.date(), "D")
    if isinstance(value, date):
        return np.datetime64(value, "D")
    if isinstance(value, (np.datetime64, np.ndarray)):
        if np.asarray(value).dtype.kind != "M":
            raise TypeError(f"Expected a datetime64 array; got dtype {value.dtype}.")
        return value.astype("datetime64[D]")
    raise TypeError(f"Expected a date-like value; got {type(value).__name__}.")


def shift(value: DateLike, days: Any) -> DateLike:
    """
    Move ``value`` by a whole number of days, keeping its type and time of day.

    ``days`` is a ``timedelta64[D]`` (scalar or array) as produced by
    subtracting two results of :func:`to_days`.  A date or datetime moved
    by an array of offsets comes back as a ``datetime64`` array.
    """
    if isinstance(value, (date, datetime)):
        if np.ndim(days):
            return np.datetime64(value) + days
        return value + timedelta(days=int(days // _ONE_DAY))
    return value + days


def check_delta(delta: Any) -> Any:
    """Validate a business-day count: integral and non-negative."""
    if isinstance(delta, np.ndarray):
        if delta.dtype.kind not in "iu":
            raise TypeError(f"Business-day delta must be integral; got dtype {delta.dtype}.")
        if np.any(delta < 0):
            raise InvalidCalendarError("Business-day delta must be non-negative.")
        return delta.astype(np.int64)
    delta = operator.index(delta)
    if delta < 0:
        raise InvalidCalendarError(
            f"Business-day delta must be non-negative; got {delta}."
        )
    return delta
