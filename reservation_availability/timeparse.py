import re
from datetime import time

from reservation_availability.errors import MalformedTime

# "18:30", "6:30 PM", "6:30pm", "6 PM", "18"
TIME_PATTERN = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*([AaPp][Mm])?\s*$")


def parse(time_string: str) -> time:
    """Parses a staff-entered time string into a time of day.

    A trailing AM/PM marker is optional and case-insensitive. Without one the hour
    is read on a 24-hour clock. 12 AM is midnight and 12 PM is noon.

    Raises:
        MalformedTime: if the hour or minute cannot be read or is out of range.
    """
    if not isinstance(time_string, str):
        raise MalformedTime(repr(time_string), "time is not a string")

    match = TIME_PATTERN.match(time_string)
    if not match:
        raise MalformedTime(time_string)

    hour_str, minute_str, marker = match.groups()
    hour = int(hour_str)
    minute = int(minute_str) if minute_str is not None else 0

    if minute > 59:
        raise MalformedTime(time_string, "minute out of range")

    if marker is not None:
        if not 1 <= hour <= 12:
            raise MalformedTime(time_string, "hour out of range for 12-hour clock")
        is_pm = marker.upper() == "PM"
        if hour == 12:
            hour = 12 if is_pm else 0
        elif is_pm:
            hour += 12
    elif hour > 23:
        raise MalformedTime(time_string, "hour out of range")

    return time(hour=hour, minute=minute)


def to_minutes(time_string: str) -> int:
    """Converts a time string to minutes since midnight."""
    parsed = parse(time_string)
    return parsed.hour * 60 + parsed.minute


def format_minutes(minutes: int) -> str:
    """Formats minutes since midnight as HH:MM."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
