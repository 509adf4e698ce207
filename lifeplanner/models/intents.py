# File: lifeplanner/models/intents.py
"""
Mutation intents emitted by gesture controllers, plus menu and draft state.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Tuple

from .enums import ContextAction, EventPriority, OccurrenceKind
from .occurrence import Occurrence

Point = Tuple[float, float]


@dataclass(frozen=True)
class MoveIntent:
    """Shift a whole event to another day."""
    source_id: str
    new_start: datetime
    new_end: datetime
    day_delta: int = 0


@dataclass(frozen=True)
class ResizeIntent:
    """Change the end boundary of an event; the start never moves."""
    source_id: str
    new_start: datetime
    new_end: datetime


@dataclass(frozen=True)
class ToggleIntent:
    """Flip the completion flag of an event or task."""
    source_id: str
    completed: bool
    kind: OccurrenceKind = OccurrenceKind.EVENT


@dataclass(frozen=True)
class MenuState:
    """An open context menu anchored at a screen position."""
    occurrence: Occurrence
    position: Point
    actions: Tuple[ContextAction, ...] = (ContextAction.TOGGLE_COMPLETE,)

    @property
    def toggle_label(self) -> str:
        return "Mark incomplete" if self.occurrence.completed else "Mark complete"


@dataclass
class EventDraft:
    """Seed for a new event, completed by the authoring dialog."""
    start_date: date
    end_date: date
    all_day: bool = True
    title: str = ""
    priority: EventPriority = EventPriority.MEDIUM

    def to_dict(self) -> Dict[str, Any]:
        """Create payload; the dialog fills in the remaining fields."""
        return {
            'title': self.title,
            'startDate': self.start_date.isoformat(),
            'endDate': self.end_date.isoformat(),
            'startTime': None,
            'endTime': None,
            'isAllDay': self.all_day,
            'priority': self.priority.value,
            'repeatType': None,
            'repeatInterval': None,
            'repeatEndDate': None,
            'repeatWeekdays': None,
            'completed': False,
        }
