# File: lifeplanner/models/events.py
"""
Calendar events as stored by the persistence API.
"""

import json
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Dict, FrozenSet, Optional, Tuple

from .enums import EventPriority, RecurrenceKind
from .common import parse_date, parse_time, parse_weekday_set, coerce_interval, parse_bool

ALL_DAY_END = time(23, 59, 59)
DEFAULT_END_TIME = time(23, 59)


@dataclass(frozen=True)
class RecurrenceRule:
    """Recurrence policy attached to an event."""
    kind: RecurrenceKind = RecurrenceKind.NONE
    interval: int = 1
    end_date: Optional[date] = None
    weekdays: FrozenSet[int] = frozenset()  # 0 = Sunday, weekly only

    @property
    def is_recurring(self) -> bool:
        return self.kind != RecurrenceKind.NONE and self.end_date is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RecurrenceRule':
        """Build a rule from the repeat* fields of an event payload."""
        raw_kind = data.get('repeatType') or 'none'
        try:
            kind = RecurrenceKind(str(raw_kind).lower())
        except ValueError:
            kind = RecurrenceKind.NONE

        return cls(
            kind=kind,
            interval=coerce_interval(data.get('repeatInterval')),
            end_date=parse_date(data.get('repeatEndDate')),
            weekdays=parse_weekday_set(data.get('repeatWeekdays')),
        )

    def to_dict(self) -> Dict[str, Any]:
        if self.kind == RecurrenceKind.NONE:
            return {
                'repeatType': None,
                'repeatInterval': None,
                'repeatEndDate': self.end_date.isoformat() if self.end_date else None,
                'repeatWeekdays': None,
            }
        weekdays = [str(d) for d in sorted(self.weekdays)]
        return {
            'repeatType': self.kind.value,
            'repeatInterval': self.interval,
            'repeatEndDate': self.end_date.isoformat() if self.end_date else None,
            'repeatWeekdays': json.dumps(weekdays) if weekdays else None,
        }


@dataclass
class SourceEvent:
    """A user-authored calendar event, possibly recurring."""
    id: str
    title: str
    start_date: date
    end_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    all_day: bool = False
    priority: EventPriority = EventPriority.MEDIUM
    completed: bool = False
    recurrence: RecurrenceRule = field(default_factory=RecurrenceRule)
    description: str = ''

    # Pass-through fields the calendar never interprets
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate event data and auto-convert types."""
        if isinstance(self.priority, str):
            try:
                self.priority = EventPriority(self.priority.lower())
            except ValueError:
                self.priority = EventPriority.MEDIUM

        if isinstance(self.start_date, str):
            self.start_date = parse_date(self.start_date)
        if self.start_date is None:
            raise ValueError(f"Event has no start date: {self.title}")

        if self.end_date and self.end_date < self.start_date:
            raise ValueError(f"Event end date precedes start date: {self.title}")

    @property
    def is_recurring(self) -> bool:
        return self.recurrence.is_recurring

    def base_bounds(self) -> Tuple[datetime, datetime]:
        """Start and end of the first occurrence."""
        last_day = self.end_date or self.start_date
        if self.all_day:
            return (
                datetime.combine(self.start_date, time.min),
                datetime.combine(last_day, ALL_DAY_END),
            )
        return (
            datetime.combine(self.start_date, self.start_time or time.min),
            datetime.combine(last_day, self.end_time or DEFAULT_END_TIME),
        )

    def duration(self):
        start, end = self.base_bounds()
        return end - start

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase payload the API expects."""
        payload = dict(self.extra)
        payload.update({
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'startDate': self.start_date.isoformat(),
            'endDate': (self.end_date or self.start_date).isoformat(),
            'startTime': None if self.all_day or not self.start_time else self.start_time.strftime('%H:%M'),
            'endTime': None if self.all_day or not self.end_time else self.end_time.strftime('%H:%M'),
            'isAllDay': self.all_day,
            'priority': self.priority.value,
            'completed': self.completed,
        })
        payload.update(self.recurrence.to_dict())
        return payload

    def rescheduled_payload(self, new_start: datetime, new_end: datetime) -> Dict[str, Any]:
        """
        Payload for moving or resizing this event to new bounds.

        The all-day flag and every other field are preserved; only the
        date and time columns change.
        """
        payload = self.to_dict()
        payload['startDate'] = new_start.date().isoformat()
        payload['endDate'] = new_end.date().isoformat()
        if self.all_day:
            payload['startTime'] = None
            payload['endTime'] = None
        else:
            payload['startTime'] = new_start.strftime('%H:%M')
            payload['endTime'] = new_end.strftime('%H:%M')
        return payload


_KNOWN_KEYS = {
    'id', 'title', 'description', 'startDate', 'endDate', 'startTime', 'endTime', 'isAllDay',
    'priority', 'completed', 'repeatType', 'repeatInterval', 'repeatEndDate',
    'repeatWeekdays',
}


def event_from_dict(data: dict) -> SourceEvent:
    """Create SourceEvent from an API record with type safety."""
    raw_priority = data.get('priority') or 'medium'
    try:
        priority = EventPriority(str(raw_priority).lower())
    except ValueError:
        priority = EventPriority.MEDIUM

    return SourceEvent(
        id=str(data.get('id', '')),
        title=str(data.get('title') or 'Untitled Event'),
        start_date=parse_date(data.get('startDate')),
        end_date=parse_date(data.get('endDate')),
        start_time=parse_time(data.get('startTime')),
        end_time=parse_time(data.get('endTime')),
        all_day=parse_bool(data.get('isAllDay', False)),
        priority=priority,
        completed=parse_bool(data.get('completed', False)),
        recurrence=RecurrenceRule.from_dict(data),
        description=str(data.get('description') or ''),
        extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
    )
