class CalendarError(Exception):
    """Base exception for all calendar-related errors."""
