import calendar
import datetime as dt
from typing import Optional, Sequence, Union

import numpy as np

from calexplorer.settings import Settings, get_settings, resolve_tz
from ._exceptions import CalendarError

DateLike = Union[dt.date, dt.datetime, "np.datetime64", "np.ndarray"]

_UTC = dt.timezone.utc
_EPOCH_ORDINAL: int = dt.date(1970, 1, 1).toordinal()
_EPOCH_WEEKDAY: int = 3  # 1970-01-01 was a Thursday
_MIN_DAYS: int = dt.date.min.toordinal() - _EPOCH_ORDINAL
_MAX_DAYS: int = dt.date.max.toordinal() - _EPOCH_ORDINAL


class Calendar:
    """
    Calendar rules: first weekday, week-of-year numbering, time zone and
    month/weekday names.

    Week 1 of a year is the first week (starting on ``first_weekday``) that
    holds at least ``minimum_days_in_first_week`` days of that year.  Monday
    with 4 gives ISO-8601 weeks; Sunday with 1 gives US weeks.

    Date fields accept a ``date``/``datetime`` and return scalars, or any
    ``datetime64`` array-like and return arrays of the same shape.  Weekdays
    use the ``calendar`` module numbering (0 = Monday … 6 = Sunday).
    """

    def __init__(
        self,
        first_weekday: int = calendar.SUNDAY,
        minimum_days_in_first_week: int = 1,
        tz: Optional[dt.tzinfo] = None,
        month_names: Optional[Sequence[str]] = None,
        weekday_names: Optional[Sequence[str]] = None,
    ) -> None:
        if not 0 <= first_weekday <= 6:
            raise CalendarError(f"first_weekday must be in 0..6; got {first_weekday}.")
        if not 1 <= minimum_days_in_first_week <= 7:
            raise CalendarError(
                "minimum_days_in_first_week must be in 1..7; "
                f"got {minimum_days_in_first_week}."
            )

        self._first: int = int(first_weekday)
        self._min_days: int = int(minimum_days_in_first_week)
        self._tz: dt.tzinfo = tz if tz is not None else resolve_tz("local")

        months = list(month_names) if month_names is not None else list(calendar.month_name)[1:]
        if len(months) != 12:
            raise CalendarError(f"Expected 12 month names; got {len(months)}.")
        weekdays = list(weekday_names) if weekday_names is not None else list(calendar.day_name)
        if len(weekdays) != 7:
            raise CalendarError(f"Expected 7 weekday names; got {len(weekdays)}.")
        self._month_names: list[str] = months
        self._weekday_names: list[str] = weekdays

    @classmethod
    def current(cls, settings: Optional[Settings] = None) -> "Calendar":
        """Calendar configured from the environment (see calexplorer.settings)."""
        settings = settings or get_settings()
        return cls(
            first_weekday=settings.first_weekday,
            minimum_days_in_first_week=settings.minimum_days_in_first_week,
            tz=resolve_tz(settings.timezone),
        )

    # ── instants ─────────────────────────────────────────────────────────

    def now(self) -> dt.datetime:
        return dt.datetime.now(self._tz)

    def localize(self, value: dt.datetime) -> dt.datetime:
        """Naive values are wall time in this calendar's zone; aware ones are converted."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=self._tz)
        return value.astimezone(_UTC).astimezone(self._tz)

    def add_days(self, value: dt.datetime, days: int) -> dt.datetime:
        """Wall-clock arithmetic: the time of day survives DST transitions."""
        try:
            shifted = self.localize(value) + dt.timedelta(days=days)
            return shifted.astimezone(_UTC).astimezone(self._tz)
        except OverflowError as ex:
            raise CalendarError(f"Cannot add {days} days to {value!r}.") from ex

    def add_hours(self, value: dt.datetime, hours: int) -> dt.datetime:
        """Absolute arithmetic: always exactly ``hours`` of elapsed time."""
        try:
            shifted = self.localize(value).astimezone(_UTC) + dt.timedelta(hours=hours)
            return shifted.astimezone(self._tz)
        except OverflowError as ex:
            raise CalendarError(f"Cannot add {hours} hours to {value!r}.") from ex

    # ── date fields ──────────────────────────────────────────────────────

    def weekday(self, value: DateLike) -> Union[int, np.ndarray]:
        days, scalar = self._to_days(value)
        return self._out(self._weekday(days), scalar)

    def day_of_week(self, value: DateLike) -> Union[int, np.ndarray]:
        """Position within the week, 1 on ``first_weekday`` through 7."""
        days, scalar = self._to_days(value)
        return self._out(self._day_of_week(days), scalar)

    def start_of_week(self, value: DateLike) -> Union[dt.date, np.ndarray]:
        days, scalar = self._to_days(value)
        start = days - (self._day_of_week(days) - 1)
        if scalar:
            if int(start) < _MIN_DAYS:
                raise CalendarError(f"Week of {value!r} starts before {dt.date.min}.")
            return dt.date.fromordinal(int(start) + _EPOCH_ORDINAL)
        return start.astype("datetime64[D]")

    def week_window(self, value: DateLike) -> tuple[dt.date, dt.date]:
        """First and last day of the week holding ``value``, clipped to ``date.min``..``date.max``."""
        days, _ = self._to_days(value)
        start = int(np.asarray(days - (self._day_of_week(days) - 1)).flat[0])
        end = start + 6
        return (
            dt.date.fromordinal(max(start, _MIN_DAYS) + _EPOCH_ORDINAL),
            dt.date.fromordinal(min(end, _MAX_DAYS) + _EPOCH_ORDINAL),
        )

    def week_of_year(self, value: DateLike) -> Union[int, np.ndarray]:
        days, scalar = self._to_days(value)
        base, _ = self._week_base(days)
        return self._out((days - base) // 7 + 1, scalar)

    def year_for_week_of_year(self, value: DateLike) -> Union[int, np.ndarray]:
        days, scalar = self._to_days(value)
        _, shift = self._week_base(days)
        years = days.astype("datetime64[D]").astype("datetime64[Y]").astype(np.int64)
        return self._out(years + 1970 + shift, scalar)

    # ── names ────────────────────────────────────────────────────────────

    def month_name(self, month: int) -> str:
        if not 1 <= month <= 12:
            raise CalendarError(f"Month must be in 1..12; got {month}.")
        return self._month_names[month - 1]

    def weekday_name(self, weekday: int) -> str:
        if not 0 <= weekday <= 6:
            raise CalendarError(f"Weekday must be in 0..6; got {weekday}.")
        return self._weekday_names[weekday]

    # ── internals ────────────────────────────────────────────────────────

    def _to_days(self, value: DateLike) -> tuple[np.ndarray, bool]:
        # Days since 1970-01-01, as int64 (0-d for scalars).
        if isinstance(value, dt.datetime):
            value = self.localize(value).date()
        if isinstance(value, dt.date):
            return np.asarray(value.toordinal() - _EPOCH_ORDINAL, dtype=np.int64), True
        arr = np.asarray(value, dtype="datetime64[D]")
        return arr.astype(np.int64), arr.ndim == 0

    @staticmethod
    def _out(result: np.ndarray, scalar: bool) -> Union[int, np.ndarray]:
        return int(np.asarray(result).flat[0]) if scalar else result

    @staticmethod
    def _weekday(days: np.ndarray) -> np.ndarray:
        return (days + _EPOCH_WEEKDAY) % 7

    def _day_of_week(self, days: np.ndarray) -> np.ndarray:
        return (self._weekday(days) - self._first + 7) % 7 + 1

    def _week_one_start(self, years: np.ndarray) -> np.ndarray:
        jan1 = years.astype("datetime64[D]").astype(np.int64)
        offset = (self._weekday(jan1) - self._first) % 7
        start = jan1 - offset
        # The week holding Jan 1 only counts when enough of it lies in the new year.
        return np.where(7 - offset >= self._min_days, start, start + 7)

    def _week_base(self, days: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """First day of week 1 of the owning week-year, and the year shift (-1, 0, +1)."""
        years = days.astype("datetime64[D]").astype("datetime64[Y]")
        this_start = self._week_one_start(years)
        next_start = self._week_one_start(years + 1)
        prev_start = self._week_one_start(years - 1)

        shift = np.where(days < this_start, -1, np.where(days >= next_start, 1, 0))
        base = np.where(shift < 0, prev_start, np.where(shift > 0, next_start, this_start))
        return base, shift

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def first_weekday(self) -> int:
        return self._first

    @property
    def minimum_days_in_first_week(self) -> int:
        return self._min_days

    @property
    def tz(self) -> dt.tzinfo:
        return self._tz

    def __repr__(self) -> str:
        return (
            f"Calendar(first_weekday={calendar.day_name[self._first]!r}, "
            f"minimum_days_in_first_week={self._min_days}, "
            f"tz={self._tz!s})"
        )
