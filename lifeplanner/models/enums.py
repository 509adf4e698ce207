# File: lifeplanner/models/enums.py

from enum import Enum


class EventPriority(Enum):
    """Importance of a calendar event."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskPriority(Enum):
    """Task priority letters used by the planning pages."""
    A = "A"  # Must do
    B = "B"  # Should do
    C = "C"  # Nice to do


class RecurrenceKind(Enum):
    """Supported recurrence policies."""
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class OccurrenceKind(Enum):
    """What a rendered calendar item was projected from."""
    EVENT = "event"
    TASK = "task"


class ContextAction(Enum):
    """Actions offered by the right-click menu."""
    TOGGLE_COMPLETE = "complete"
