from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Mapping, Optional

import numpy as np

from ._dates import (
    WEEKDAYS,
    DateLike,
    check_delta,
    normalise_weekday,
    parse_date,
    shift,
    to_days,
)
from ._exceptions import InvalidCalendarError
from .sources import CalendarSource, YamlDirectorySource

logger = logging.getLogger(__name__)

_ONE_DAY = np.timedelta64(1, "D")


def _scalar(x: Any) -> Any:
    """Unwrap 0-d numpy results into plain Python values."""
    return x.item() if np.ndim(x) == 0 else x


class Calendar:
    """
    Business-day calendar: a set of working weekdays plus a set of holidays.

    All queries accept ``date``, ``datetime`` or ``numpy.datetime64`` values
    (and ``datetime64`` arrays).  Classification only looks at the date part;
    returned values keep the type and time of day of the input.  The rules
    are compiled into a ``numpy.busdaycalendar`` so that rolling, offsetting
    and counting run through NumPy's business-day routines.
    """

    default_business_days: tuple[str, ...] = ("mon", "tue", "wed", "thu", "fri")

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        name: Optional[str] = None,
    ) -> None:
        if config is None:
            config = {}
        if not isinstance(config, Mapping):
            raise InvalidCalendarError(
                f"Calendar config must be a mapping; got {type(config).__name__}."
            )

        self.name = name
        self._business_days: list[str] = []
        self._holidays: set[date] = set()
        self.set_business_days(config.get("business_days"))
        self.set_holidays(config.get("holidays"))

    @classmethod
    def load(cls, name: str, source: Optional[CalendarSource] = None) -> "Calendar":
        """Build the calendar called ``name``; bundled YAML calendars by default."""
        if source is None:
            source = YamlDirectorySource()
        config = source.fetch(name)
        calendar = cls(config, name=name)
        logger.debug(
            "Loaded calendar %r from %r: business days %s, %d holiday(s)",
            name, source, calendar.business_days, len(calendar.holidays),
        )
        return calendar

    # ── construction-time mutators ───────────────────────────────────────

    def set_business_days(self, days: Optional[Iterable[str]]) -> "Calendar":
        if isinstance(days, str):
            raise InvalidCalendarError(
                f"Business days must be a sequence of names; got {days!r}."
            )
        names = list(days) if days is not None else []
        if not names:
            normalised = list(self.default_business_days)
        else:
            normalised = []
            for day in names:
                canonical = normalise_weekday(day)
                if canonical not in normalised:
                    normalised.append(canonical)
        self._business_days = normalised
        self._compile()
        return self

    def set_holidays(self, dates: Optional[Iterable[Any]]) -> "Calendar":
        if isinstance(dates, str):
            raise InvalidCalendarError(
                f"Holidays must be a sequence of dates; got {dates!r}."
            )
        self._holidays = {parse_date(d) for d in dates} if dates is not None else set()
        self._compile()
        return self

    def _compile(self) -> None:
        holidays = np.array(sorted(self._holidays), dtype="datetime64[D]")
        self._busdaycal = np.busdaycalendar(
            weekmask=[int(flag) for flag in self.weekmask],
            holidays=holidays,
        )

    # ── queries ──────────────────────────────────────────────────────────

    def is_business_day(self, day: DateLike) -> Any:
        result = np.is_busday(to_days(day), busdaycal=self._busdaycal)
        return _scalar(result)

    def roll_forward(self, day: DateLike) -> DateLike:
        return self._offset(day, 0, "forward")

    def roll_backward(self, day: DateLike) -> DateLike:
        return self._offset(day, 0, "backward")

    def next_business_day(self, day: DateLike) -> DateLike:
        return self._offset(day, 0, "forward", start_shift=1)

    def previous_business_day(self, day: DateLike) -> DateLike:
        return self._offset(day, 0, "backward", start_shift=-1)

    def add_business_days(self, day: DateLike, delta: Any) -> DateLike:
        """
        Roll ``day`` forward onto a business day, then step ``delta``
        business days further.  ``delta`` must be non-negative.
        """
        return self._offset(day, check_delta(delta), "forward")

    def subtract_business_days(self, day: DateLike, delta: Any) -> DateLike:
        """Mirror of :meth:`add_business_days`, rolling and stepping backward."""
        return self._offset(day, -check_delta(delta), "backward")

    def business_days_between(self, start: DateLike, end: DateLike) -> Any:
        """
        Count the business days met walking from ``start`` up to, but not
        onto, ``end``.  ``start`` itself counts when it is a business day.
        Empty and reversed ranges give 0.
        """
        counts = np.busday_count(
            to_days(start), to_days(end), busdaycal=self._busdaycal
        )
        return _scalar(np.maximum(counts, 0))

    def business_days_in_range(self, start: DateLike, end: DateLike) -> list:
        """The business days counted by :meth:`business_days_between`."""
        first = to_days(start)
        if np.ndim(first) or np.ndim(to_days(end)):
            raise TypeError("business_days_in_range takes scalar dates only.")
        days = np.arange(first, to_days(end), dtype="datetime64[D]")
        days = days[np.is_busday(days, busdaycal=self._busdaycal)]
        return [shift(start, d - first) for d in days]

    def _offset(
        self,
        day: DateLike,
        offsets: Any,
        roll: str,
        start_shift: int = 0,
    ) -> DateLike:
        origin = to_days(day)
        target = np.busday_offset(
            origin + start_shift * _ONE_DAY,
            offsets,
            roll=roll,
            busdaycal=self._busdaycal,
        )
        return shift(day, target - origin)

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def business_days(self) -> list[str]:
        return list(self._business_days)

    @property
    def holidays(self) -> set[date]:
        return set(self._holidays)

    @property
    def weekmask(self) -> tuple[bool, ...]:
        """Monday..Sunday flags, True for business weekdays."""
        return tuple(d in self._business_days for d in WEEKDAYS)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Calendar):
            return NotImplemented
        return (
            self.weekmask == other.weekmask
            and self._holidays == other._holidays
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Calendar(name={self.name!r}, "
            f"business_days={self._business_days}, "
            f"holidays={len(self._holidays)})"
        )
