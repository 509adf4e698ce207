from .enums import EventPriority, TaskPriority, RecurrenceKind, OccurrenceKind, ContextAction
from .common import parse_iso_datetime, parse_date, parse_time, parse_weekday_set
from .events import RecurrenceRule, SourceEvent, event_from_dict
from .tasks import TaskRef, task_from_dict
from .occurrence import Occurrence, DayBucket
from .intents import MoveIntent, ResizeIntent, ToggleIntent, MenuState, EventDraft, Point
from .config import CalendarSettings
from .api import ApiResponse

__all__ = [
    "EventPriority",
    "TaskPriority",
    "RecurrenceKind",
    "OccurrenceKind",
    "ContextAction",
    "parse_iso_datetime",
    "parse_date",
    "parse_time",
    "parse_weekday_set",
    "RecurrenceRule",
    "SourceEvent",
    "event_from_dict",
    "TaskRef",
    "task_from_dict",
    "Occurrence",
    "DayBucket",
    "MoveIntent",
    "ResizeIntent",
    "ToggleIntent",
    "MenuState",
    "EventDraft",
    "Point",
    "CalendarSettings",
    "ApiResponse",
]
