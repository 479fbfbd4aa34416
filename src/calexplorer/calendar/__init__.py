"""
calexplorer.calendar
~~~~~~~~~~~~~~~~~~~~

Calendar rules over the standard ``datetime`` types.  A Calendar knows which
weekday starts the week, how week 1 of a year is chosen, which time zone
wall-clock fields are read in, and the month/weekday names to display.

Basic usage::

    import calendar, datetime as dt
    from calexplorer.calendar import Calendar

    cal = Calendar(first_weekday=calendar.SUNDAY, tz=dt.timezone.utc)
    cal.week_of_year(dt.date(2024, 3, 15))         # → 11
    cal.day_of_week(dt.date(2024, 3, 15))          # → 6 (Friday)
    cal.add_days(dt.datetime(2024, 3, 15), 91)      # wall-clock arithmetic

NumPy ``datetime64`` arrays are accepted everywhere a date is::

    import numpy as np
    days  = np.array(["2024-01-01", "2024-12-31"], dtype="datetime64[D]")
    weeks = cal.week_of_year(days)                  # → array([1, 1])

Public API
----------
Calendar       The main class.
CalendarError  Base exception for all calendar-related errors.
"""

from __future__ import annotations

from calexplorer.calendar._exceptions import CalendarError
from calexplorer.calendar.calendar import Calendar

__all__ = [
    "Calendar",
    "CalendarError",
]
