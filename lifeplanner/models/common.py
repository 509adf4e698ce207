# File: lifeplanner/models/common.py

import json
from datetime import date, datetime, time
from typing import Any, FrozenSet, Optional, Union


def parse_iso_datetime(date_str: Optional[str]) -> Optional[datetime]:
    """Robustly parse ISO date strings with 'Z' or offsets."""
    if not date_str:
        return None
    try:
        # Python < 3.11 does not accept 'Z' in fromisoformat
        clean_str = date_str.replace('Z', '+00:00')
        return datetime.fromisoformat(clean_str)
    except ValueError:
        # Fallback for simple date strings without time
        try:
            return datetime.strptime(date_str, "%Y-%m-%d")
        except ValueError:
            return None


def parse_date(value: Union[str, date, None]) -> Optional[date]:
    """Parse a 'YYYY-MM-DD' (or full ISO) value into a date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = parse_iso_datetime(str(value).strip())
    return parsed.date() if parsed else None


def parse_time(value: Union[str, time, None]) -> Optional[time]:
    """Parse an 'HH:MM' or 'HH:MM:SS' clock value."""
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(str(value).strip(), fmt).time()
        except ValueError:
            continue
    return None


def parse_weekday_set(raw: Any) -> FrozenSet[int]:
    """
    Parse a stored weekday subset into integers 0..6 (0 = Sunday).

    The backend stores the subset as a JSON string such as '["1","3"]'.
    Unparseable payloads yield an empty set; stray entries are ignored.
    """
    if raw is None or raw == "":
        return frozenset()

    items = raw
    if isinstance(raw, (bytes, str)):
        try:
            items = json.loads(raw)
        except (TypeError, ValueError):
            return frozenset()

    if not isinstance(items, (list, tuple, set, frozenset)):
        return frozenset()

    weekdays = set()
    for item in items:
        if isinstance(item, bool):
            continue
        try:
            day = int(str(item).strip())
        except ValueError:
            continue
        if 0 <= day <= 6:
            weekdays.add(day)
    return frozenset(weekdays)


def js_weekday(day: date) -> int:
    """Weekday number with Sunday = 0, as stored in weekday subsets."""
    return (day.weekday() + 1) % 7


def coerce_interval(raw: Any) -> int:
    """Recurrence interval as an int >= 1."""
    try:
        interval = int(raw)
    except (TypeError, ValueError):
        return 1
    return interval if interval >= 1 else 1


def parse_bool(raw: Any) -> bool:
    """Interpret loosely typed flags ('true', 1, 'yes')."""
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in ['yes', 'true', '1', 'y', 't']
