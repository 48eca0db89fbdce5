"""
Wall-clock formatting for display timestamps.
"""

from datetime import datetime
from typing import Optional

DISPLAY_TIME_FORMAT = "%m/%d/%Y at %I:%M %p"


def format_display_time(ts: datetime, fmt: str = DISPLAY_TIME_FORMAT) -> str:
    """
    Format a timestamp for the price display.

    Args:
        ts: Timestamp to format
        fmt: strftime format, month/day/year and 12-hour clock by default

    Returns:
        Formatted string, e.g. "10/19/2026 at 03:04 PM"
    """
    return ts.strftime(fmt)


def now(fmt: str = DISPLAY_TIME_FORMAT, current: Optional[datetime] = None) -> str:
    """
    Current local time formatted for display.

    Args:
        fmt: strftime format
        current: Override of the current time, local wall clock when omitted

    Returns:
        Formatted local time
    """
    if current is None:
        current = datetime.now()
    return format_display_time(current, fmt)
