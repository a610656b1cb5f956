# routes/schedule_time.py
# Time / display formats

from datetime import datetime, tzinfo
from typing import Optional

from settings import APP_TIMEZONE

# <input type="datetime-local"> value format
LOCAL_INPUT_FMT = "%Y-%m-%dT%H:%M"


def now(tz: tzinfo = APP_TIMEZONE) -> datetime:
    return datetime.now(tz)

def to_local(dt: datetime, tz: tzinfo = APP_TIMEZONE) -> datetime:
    """
    Moves an instant into the display timezone. Naive values are taken to already
    be wall-clock times of that timezone.

    :param dt: timestamp
    :type dt: datetime
    :param tz: display timezone
    :type tz: tzinfo
    :return: aware datetime in ``tz``
    :rtype: datetime
    """

    return dt.replace(tzinfo=tz) if dt.tzinfo is None else dt.astimezone(tz)

def to_input_value(dt: Optional[datetime], tz: tzinfo = APP_TIMEZONE) -> str:
    """
    Formats a timestamp for a ``datetime-local`` input, e.g. "2025-01-06T09:00".

    :param dt: timestamp or None
    :type dt: Optional[datetime]
    :param tz: display timezone
    :type tz: tzinfo
    :return: "YYYY-MM-DDTHH:MM" or "" for None
    :rtype: str
    """

    if dt is None:
        return ""
    return to_local(dt, tz).strftime(LOCAL_INPUT_FMT)

def parse_input_value(s: str, tz: tzinfo = APP_TIMEZONE) -> datetime:
    """
    Parses a ``datetime-local`` value as wall-clock time in the display timezone.
    An explicit offset in the string wins over ``tz``.

    :param s: "YYYY-MM-DDTHH:MM" (seconds allowed)
    :type s: str
    :param tz: display timezone
    :type tz: tzinfo
    :return: aware datetime
    :rtype: datetime
    :raises ValueError: not an ISO date-time
    """

    return to_local(datetime.fromisoformat(s.strip()), tz)

def format_time(dt: datetime, tz: tzinfo = APP_TIMEZONE) -> str:
    # "09:00"
    return to_local(dt, tz).strftime("%H:%M")

def format_date(dt: datetime, tz: tzinfo = APP_TIMEZONE) -> str:
    # "Mon, Jan 6, 2025"
    d = to_local(dt, tz)
    return f"{d.strftime('%a, %b')} {d.day}, {d.year}"
