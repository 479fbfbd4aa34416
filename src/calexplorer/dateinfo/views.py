from __future__ import annotations

from typing import Optional

from .dateinfo import DateInfo, Granularity, ordinal_suffix


def _day_lines(info: DateInfo) -> list[str]:
    return [
        f"{info.day_of_week_name}, {info.day}{ordinal_suffix(info.day)} of {info.month_name}",
        f"Day {info.day_of_week} of Week {info.week_of_year}",
        str(info.year),
    ]


def describe(info: DateInfo, granularity: Granularity) -> list[str]:
    """Text lines shown for ``info`` at the given scale, top to bottom."""
    if granularity is Granularity.QUARTER:
        return [f"Quarter {info.quarter_of_year} of Year {info.year}"]
    if granularity is Granularity.WEEK:
        return [
            f"Week {info.week_of_year} of {info.year}",
            f"Week {info.week_of_quarter} of Quarter {info.quarter_of_year}",
            info.week_date_range_description,
        ]
    if granularity is Granularity.DAY:
        return _day_lines(info)
    return [info.time_of_day.description, *_day_lines(info)]


def icon_name(info: DateInfo, granularity: Granularity) -> Optional[str]:
    if granularity is Granularity.TIME_OF_DAY:
        return info.time_of_day.icon_name
    return None
