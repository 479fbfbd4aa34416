"""
calexplorer.dateinfo
~~~~~~~~~~~~~~~~~~~~

Calendar fields of a single held instant, and navigation through time at a
selectable granularity.

Basic usage::

    import calendar, datetime as dt
    from calexplorer.calendar import Calendar
    from calexplorer.dateinfo import DateInfo, Granularity

    cal  = Calendar(first_weekday=calendar.SUNDAY, tz=dt.timezone.utc)
    info = DateInfo(dt.datetime(2024, 3, 15, 9), calendar=cal)
    info.day_of_week_name                   # → "Friday"
    info.week_date_range_description        # → "10th of March - 16th of March"
    info.move_forward(Granularity.WEEK)     # → 22nd of March

Display lines for each scale::

    from calexplorer.dateinfo import Navigator

    nav = Navigator(info, Granularity.WEEK)
    nav.swipe(-120.0)                       # left swipe → one week later
    nav.lines()

Logging
-------
Steps and resets emit structlog events (``date_moved`` and ``date_reset`` at
debug, ``date_move_rejected`` at warning).  Until
``calexplorer.settings.configure_logging`` is called, structlog's default
configuration prints every one of them, debug included, to stdout::

    from calexplorer.settings import configure_logging
    configure_logging()                     # honours CALEXPLORER_LOG_LEVEL

Public API
----------
DateInfo        Held instant with derived calendar fields.
Granularity     Navigation step sizes.
StepUnit        Wall-clock days or elapsed hours.
TimeOfDay       Six-hour buckets of the day.
Navigator       Selected granularity plus swipe handling.
describe        Text lines for one scale view.
icon_name       Time-of-day icon for the scale view, if any.
ordinal_suffix  English ordinal suffix ("st", "nd", "rd", "th").
"""

from __future__ import annotations

from calexplorer.dateinfo.dateinfo import DateInfo, Granularity, StepUnit, TimeOfDay, ordinal_suffix
from calexplorer.dateinfo.navigator import Navigator
from calexplorer.dateinfo.views import describe, icon_name

__all__ = [
    "DateInfo",
    "Granularity",
    "Navigator",
    "StepUnit",
    "TimeOfDay",
    "describe",
    "icon_name",
    "ordinal_suffix",
]
