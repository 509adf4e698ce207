# File: lifeplanner/models/occurrence.py
"""
Renderable calendar items and the day cells that hold them.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from .enums import EventPriority, OccurrenceKind, TaskPriority


@dataclass(frozen=True)
class Occurrence:
    """
    A materialized calendar item.

    Capability flags are fixed when the occurrence is created; gesture code
    only reads them.
    """
    id: str
    source_id: str
    title: str
    start: datetime
    end: datetime
    kind: OccurrenceKind
    color: str
    priority: Union[EventPriority, TaskPriority, None] = None
    all_day: bool = False
    completed: bool = False
    is_recurring_instance: bool = False
    draggable: bool = False
    resizable: bool = False
    context_menu_eligible: bool = False

    @classmethod
    def for_event(cls, *, id: str, source_id: str, title: str, start: datetime,
                  end: datetime, color: str, priority: Optional[EventPriority] = None,
                  all_day: bool = False, completed: bool = False,
                  is_recurring_instance: bool = False) -> 'Occurrence':
        mutable = not is_recurring_instance
        return cls(
            id=id,
            source_id=source_id,
            title=title,
            start=start,
            end=end,
            kind=OccurrenceKind.EVENT,
            color=color,
            priority=priority,
            all_day=all_day,
            completed=completed,
            is_recurring_instance=is_recurring_instance,
            draggable=mutable,
            resizable=mutable,
            context_menu_eligible=mutable,
        )

    @classmethod
    def for_task(cls, *, id: str, source_id: str, title: str, start: datetime,
                 end: datetime, color: str, priority: Optional[TaskPriority] = None,
                 completed: bool = False) -> 'Occurrence':
        return cls(
            id=id,
            source_id=source_id,
            title=title,
            start=start,
            end=end,
            kind=OccurrenceKind.TASK,
            color=color,
            priority=priority,
            all_day=True,
            completed=completed,
        )

    @property
    def is_task(self) -> bool:
        return self.kind == OccurrenceKind.TASK

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def day(self) -> date:
        """Calendar day the occurrence is bucketed under."""
        return self.start.date()


@dataclass
class DayBucket:
    """One grid cell for one day."""
    date: date
    in_month: bool
    is_today: bool = False
    occurrences: List[Occurrence] = field(default_factory=list)
    max_visible: int = 3

    @property
    def visible_occurrences(self) -> List[Occurrence]:
        return self.occurrences[:self.max_visible]

    @property
    def overflow_occurrences(self) -> List[Occurrence]:
        return self.occurrences[self.max_visible:]

    @property
    def overflow_count(self) -> int:
        return max(0, len(self.occurrences) - self.max_visible)

    @property
    def is_empty(self) -> bool:
        return not self.occurrences
