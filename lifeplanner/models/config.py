# File: lifeplanner/models/config.py
"""
Data models for calendar configuration.
"""

from dataclasses import dataclass


@dataclass
class CalendarSettings:
    """Tunable constants of the month grid and recurrence engine."""
    max_visible_per_day: int = 3
    max_recurring_instances: int = 100
    event_color: str = "#64748B"
    task_color: str = "#94A3B8"
    completed_color: str = "#6b7280"
    recurring_glyph: str = "🔄"

    def __post_init__(self):
        if self.max_visible_per_day < 0:
            raise ValueError("max_visible_per_day cannot be negative")
        if self.max_recurring_instances < 0:
            raise ValueError("max_recurring_instances cannot be negative")

    @classmethod
    def from_dict(cls, data: dict) -> 'CalendarSettings':
        """Create settings from a dictionary, keeping defaults for missing keys."""
        defaults = cls()
        return cls(
            max_visible_per_day=int(data.get('max_visible_per_day', defaults.max_visible_per_day)),
            max_recurring_instances=int(data.get('max_recurring_instances', defaults.max_recurring_instances)),
            event_color=data.get('event_color', defaults.event_color),
            task_color=data.get('task_color', defaults.task_color),
            completed_color=data.get('completed_color', defaults.completed_color),
            recurring_glyph=data.get('recurring_glyph', defaults.recurring_glyph),
        )

    @classmethod
    def from_config(cls) -> 'CalendarSettings':
        """Settings taken from the application Config."""
        from lifeplanner.core.config_manager import Config

        return cls(
            max_visible_per_day=Config.MAX_VISIBLE_PER_DAY,
            max_recurring_instances=Config.MAX_RECURRING_INSTANCES,
            event_color=Config.EVENT_COLOR,
            task_color=Config.TASK_COLOR,
            completed_color=Config.COMPLETED_COLOR,
            recurring_glyph=Config.RECURRING_GLYPH,
        )
