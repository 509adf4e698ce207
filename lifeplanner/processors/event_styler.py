# File: lifeplanner/processors/event_styler.py
"""
Visual attributes for calendar items.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Union

from lifeplanner.models import CalendarSettings, EventPriority, Occurrence, TaskPriority

PRIORITY_MARKS = {
    EventPriority.HIGH: "!!!",
    EventPriority.MEDIUM: "!!",
    EventPriority.LOW: "!",
    TaskPriority.A: "!!!",
    TaskPriority.B: "!!",
    TaskPriority.C: "!",
}

WHITE_BORDER = "rgba(255,255,255,0.8)"


@dataclass(frozen=True)
class EventStyle:
    """Render attributes of one occurrence."""
    background_color: str
    opacity: float
    border: str
    font_weight: str
    italic: bool
    strikethrough: bool
    priority_mark: str

    def to_css(self) -> Dict[str, str]:
        return {
            'backgroundColor': self.background_color,
            'borderRadius': '4px',
            'opacity': str(self.opacity),
            'border': self.border,
            'fontSize': '12px',
            'fontWeight': self.font_weight,
            'fontStyle': 'italic' if self.italic else 'normal',
            'textDecoration': 'line-through' if self.strikethrough else 'none',
        }


def priority_indicator(priority: Union[EventPriority, TaskPriority, None]) -> str:
    """Exclamation marks for a priority; unknown priorities read as medium."""
    return PRIORITY_MARKS.get(priority, "!!")


class EventStyler:
    """Derives visual attributes from kind, recurrence and completion."""

    def __init__(self, settings: Optional[CalendarSettings] = None):
        self.settings = settings or CalendarSettings()

    def style(self, occurrence: Occurrence) -> EventStyle:
        is_task = occurrence.is_task
        is_recurring = occurrence.is_recurring_instance
        is_completed = occurrence.completed

        # Tasks win over recurrence, recurrence over completion
        if is_task:
            opacity = 0.7
            border = f"2px dashed {WHITE_BORDER}"
        elif is_recurring:
            opacity = 0.8
            border = f"2px solid {WHITE_BORDER}"
        elif is_completed:
            opacity = 0.6
            border = "none"
        else:
            opacity = 1.0
            border = "none"

        return EventStyle(
            background_color=self.settings.completed_color if is_completed else occurrence.color,
            opacity=opacity,
            border=border,
            font_weight="normal" if is_task else "500",
            italic=is_recurring,
            strikethrough=is_completed,
            priority_mark=priority_indicator(occurrence.priority),
        )
