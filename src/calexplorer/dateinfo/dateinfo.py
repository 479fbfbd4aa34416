from __future__ import annotations

import datetime as dt
import enum
from typing import Callable, Optional

import structlog

from calexplorer.calendar import Calendar, CalendarError

logger = structlog.get_logger()


class StepUnit(enum.Enum):
    DAYS = "days"    # wall-clock
    HOURS = "hours"  # elapsed time


class Granularity(enum.Enum):
    """Navigation step size.  Values are ``(unit, amount)`` per single step."""

    DAY = (StepUnit.DAYS, 1)
    WEEK = (StepUnit.DAYS, 7)
    QUARTER = (StepUnit.DAYS, 91)  # thirteen weeks, not a calendar quarter
    TIME_OF_DAY = (StepUnit.HOURS, 6)

    @property
    def unit(self) -> StepUnit:
        return self.value[0]

    @property
    def amount(self) -> int:
        return self.value[1]


class TimeOfDay(enum.Enum):
    NIGHT = (0, "Night (12am - 6am)", "moon.stars.fill")
    MORNING = (6, "Morning (6am - 12pm)", "sunrise.fill")
    AFTERNOON = (12, "Afternoon (12pm - 6pm)", "sun.max.fill")
    EVENING = (18, "Evening (6pm - 12am)", "sunset.fill")

    @classmethod
    def from_hour(cls, hour: int) -> "TimeOfDay":
        if not 0 <= hour <= 23:
            raise ValueError(f"Hour must be in 0..23; got {hour}.")
        return list(cls)[hour // 6]

    @property
    def start_hour(self) -> int:
        return self.value[0]

    @property
    def description(self) -> str:
        return self.value[1]

    @property
    def icon_name(self) -> str:
        return self.value[2]


def ordinal_suffix(n: int) -> str:
    """English ordinal suffix: 1 → "st", 12 → "th", 113 → "th", 122 → "nd"."""
    if n < 0:
        raise ValueError(f"Ordinal suffixes are defined for n >= 0; got {n}.")
    if n % 10 == 1 and n % 100 != 11:
        return "st"
    if n % 10 == 2 and n % 100 != 12:
        return "nd"
    if n % 10 == 3 and n % 100 != 13:
        return "rd"
    return "th"


class DateInfo:
    """
    A single held instant with calendar fields derived from it.

    The instant only changes through ``move_forward``, ``move_backward`` and
    ``reset``; every other attribute is a pure function of the instant and
    the calendar rules.
    """

    def __init__(
        self,
        date: Optional[dt.datetime] = None,
        calendar: Optional[Calendar] = None,
        clock: Optional[Callable[[], dt.datetime]] = None,
    ) -> None:
        self._calendar: Calendar = calendar if calendar is not None else Calendar.current()
        self._clock: Callable[[], dt.datetime] = clock if clock is not None else self._calendar.now
        self._date: dt.datetime = self._calendar.localize(
            date if date is not None else self._clock()
        )

    # ── navigation ───────────────────────────────────────────────────────

    def move_forward(self, granularity: Granularity) -> None:
        self._step(granularity, 1)

    def move_backward(self, granularity: Granularity) -> None:
        self._step(granularity, -1)

    def reset(self) -> None:
        self._date = self._calendar.localize(self._clock())
        logger.debug("date_reset", date=self._date.isoformat())

    def _step(self, granularity: Granularity, direction: int) -> None:
        amount = granularity.amount * direction
        try:
            if granularity.unit is StepUnit.HOURS:
                moved = self._calendar.add_hours(self._date, amount)
            else:
                moved = self._calendar.add_days(self._date, amount)
        except CalendarError as ex:
            logger.warning(
                "date_move_rejected",
                granularity=granularity.name,
                amount=amount,
                date=self._date.isoformat(),
                error=str(ex),
            )
            return
        self._date = moved
        logger.debug(
            "date_moved",
            granularity=granularity.name,
            amount=amount,
            date=self._date.isoformat(),
        )

    # ── derived fields ───────────────────────────────────────────────────

    @property
    def date(self) -> dt.datetime:
        return self._date

    @property
    def calendar(self) -> Calendar:
        return self._calendar

    @property
    def year(self) -> int:
        return self._date.year

    @property
    def month_name(self) -> str:
        return self._calendar.month_name(self._date.month)

    @property
    def week_of_year(self) -> int:
        return self._calendar.week_of_year(self._date)

    @property
    def quarter_of_year(self) -> int:
        # Buckets of 13 weeks; week 53 lands in a fifth bucket.
        return (self.week_of_year - 1) // 13 + 1

    @property
    def week_of_quarter(self) -> int:
        return (self.week_of_year - 1) % 13 + 1

    @property
    def day(self) -> int:
        return self._date.day

    @property
    def day_of_week(self) -> int:
        return self._calendar.day_of_week(self._date)

    @property
    def day_of_week_name(self) -> str:
        return self._calendar.weekday_name(self._date.weekday())

    @property
    def week_date_range_description(self) -> str:
        # Clipped at the ends of the representable range.
        start, end = self._calendar.week_window(self._date)
        return (
            f"{start.day}{ordinal_suffix(start.day)} of {self._calendar.month_name(start.month)}"
            f" - {end.day}{ordinal_suffix(end.day)} of {self._calendar.month_name(end.month)}"
        )

    @property
    def time_of_day(self) -> TimeOfDay:
        return TimeOfDay.from_hour(self._date.hour)

    @staticmethod
    def ordinal_suffix(n: int) -> str:
        return ordinal_suffix(n)

    def __repr__(self) -> str:
        return f"DateInfo(date={self._date.isoformat()!r}, calendar={self._calendar!r})"
