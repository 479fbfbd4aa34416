"""
calexplorer.settings
~~~~~~~~~~~~~~~~~~~~

Environment-driven configuration and logging setup.

Every field can be set through a ``CALEXPLORER_``-prefixed environment
variable or a ``.env`` file::

    CALEXPLORER_FIRST_WEEKDAY=monday
    CALEXPLORER_MINIMUM_DAYS_IN_FIRST_WEEK=4     # ISO-8601 weeks
    CALEXPLORER_TIMEZONE=Europe/Amsterdam
    CALEXPLORER_LOG_FORMAT=json

Basic usage::

    from calexplorer.settings import configure_logging, get_settings

    settings = get_settings()
    configure_logging(settings)
"""

from __future__ import annotations

from calexplorer.settings.log import configure_logging
from calexplorer.settings.settings import Settings, get_settings, resolve_tz

__all__ = [
    "Settings",
    "configure_logging",
    "get_settings",
    "resolve_tz",
]
