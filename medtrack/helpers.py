# medtrack/helpers.py
import re
from datetime import datetime

from medtrack.errors import MalformedInputError

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

_DATE_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}")
_TIME_SHAPE = re.compile(r"\d{2}:\d{2}")


def api_response(success, message, data=None, status_code=200):
    return {
        "success": success,
        "message": message,
        "data": data
    }, status_code


def parse_date(value, field="date"):
    """Parse a strict YYYY-MM-DD string into a date."""
    if not value or not isinstance(value, str):
        raise MalformedInputError(f"Missing or invalid '{field}' (expected YYYY-MM-DD)")
    value = value.strip()
    if not _DATE_SHAPE.fullmatch(value):
        raise MalformedInputError(f"Invalid '{field}': {value!r} (expected YYYY-MM-DD)")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise MalformedInputError(f"Invalid '{field}': {value!r} (expected YYYY-MM-DD)")


def parse_time(value, field="time"):
    """Parse a zero-padded HH:MM string into a time. Seconds are not accepted."""
    if not value or not isinstance(value, str):
        raise MalformedInputError(f"Missing or invalid '{field}' (expected HH:MM)")
    value = value.strip()
    if not _TIME_SHAPE.fullmatch(value):
        raise MalformedInputError(f"Invalid '{field}': {value!r} (expected HH:MM)")
    try:
        return datetime.strptime(value, TIME_FORMAT).time()
    except ValueError:
        raise MalformedInputError(f"Invalid '{field}': {value!r} (expected HH:MM)")


def format_time(value):
    # zero-padded so lexical and numerical order agree
    return f"{value.hour:02d}:{value.minute:02d}"


def format_date(value):
    return value.strftime(DATE_FORMAT)
