"""Package configuration using Pydantic Settings."""

from __future__ import annotations

import calendar
import datetime as dt
import os
import re
from functools import lru_cache
from typing import Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")

_LOCALTIME = "/etc/localtime"

_WEEKDAYS = {name.lower(): i for i, name in enumerate(calendar.day_name)}


class Settings(BaseSettings):
    """Calendar and logging settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CALEXPLORER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Calendar rules
    first_weekday: int = Field(default=calendar.SUNDAY, ge=0, le=6)
    minimum_days_in_first_week: int = Field(default=1, ge=1, le=7)
    timezone: str = Field(default="local")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="text")

    @field_validator("first_weekday", mode="before")
    @classmethod
    def _weekday_by_name(cls, value: object) -> object:
        # "sunday", "Sun" and "6" are all accepted
        if isinstance(value, str) and not value.strip().isdigit():
            key = value.strip().lower()
            for name, index in _WEEKDAYS.items():
                if len(key) >= 3 and name.startswith(key):
                    return index
            raise ValueError(f"Unknown weekday name: {value!r}")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    return Settings()


def resolve_tz(name: Optional[str]) -> dt.tzinfo:
    """Resolve a timezone name into a tzinfo.

    Supported forms:
      - None/"" / "local" / "system" -> the machine's local zone, DST rules included
      - "UTC" / "Z" / "GMT" -> dt.timezone.utc
      - IANA names, e.g. "Europe/Amsterdam"
      - Fixed offsets: "+02:00", "+0200", "-05:00"

    Raises ValueError for invalid timezone identifiers.
    """
    s = (name or "").strip()
    low = s.lower()

    if low in {"", "local", "system"}:
        return _local_tz()
    if low in {"utc", "z", "gmt"}:
        return dt.timezone.utc

    m = _OFFSET_RE.match(s)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh, mm = int(hh_s), int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f"Invalid timezone offset: {s!r}")
        sign = 1 if sign_s == "+" else -1
        return dt.timezone(sign * dt.timedelta(hours=hh, minutes=mm))

    try:
        return ZoneInfo(s)
    except (ZoneInfoNotFoundError, ValueError) as ex:
        raise ValueError(f"Invalid timezone identifier: {s!r}") from ex


def _local_tz() -> dt.tzinfo:
    """The machine's zone: $TZ, then /etc/localtime, then today's fixed offset."""
    name = os.environ.get("TZ", "").lstrip(":")
    if os.path.isabs(name):
        name, path = "", name
    else:
        path = _LOCALTIME
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            pass
    try:
        with open(path, "rb") as fh:
            return ZoneInfo.from_file(fh, key="localtime")
    except (OSError, ValueError):
        pass
    # No zone database entry to be found; DST changes will not be followed.
    return dt.datetime.now().astimezone().tzinfo or dt.timezone.utc
