# File: lifeplanner/models/tasks.py

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Dict, Optional, Tuple
from .enums import TaskPriority
from .common import parse_date, parse_bool

TASK_DAY_END = time(23, 59)


@dataclass
class TaskRef:
    """A read-only task projected onto the calendar."""
    id: str
    title: str
    priority: TaskPriority
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    completed: bool = False
    project_id: Optional[str] = None
    project_color: Optional[str] = None

    def __post_init__(self):
        """Validate task data and auto-convert types."""
        # Auto-convert string priority to Enum
        if isinstance(self.priority, str):
            try:
                self.priority = TaskPriority(self.priority.upper())
            except ValueError:
                self.priority = TaskPriority.B

    @property
    def is_scheduled(self) -> bool:
        """Only dated tasks appear on the calendar."""
        return bool(self.start_date or self.end_date)

    def calendar_bounds(self) -> Tuple[datetime, datetime]:
        """All-day span from the first to the last dated day."""
        if not self.is_scheduled:
            raise ValueError(f"Task has no dates: {self.title}")
        first = self.start_date or self.end_date
        last = self.end_date or self.start_date
        return datetime.combine(first, time.min), datetime.combine(last, TASK_DAY_END)


def task_from_dict(data: dict, project_colors: Optional[Dict[str, str]] = None) -> TaskRef:
    """Create TaskRef from an API record with type safety."""
    raw_priority = data.get('priority', 'B')
    try:
        # Handle both "A" (value) and "TaskPriority.A" (name) if passed loosely
        clean_priority = str(raw_priority).split('.')[-1].upper()
        priority = TaskPriority(clean_priority)
    except ValueError:
        priority = TaskPriority.B  # Default to medium if invalid

    project_id = data.get('projectId')
    project_id = str(project_id) if project_id is not None else None
    project_color = None
    if project_id and project_colors:
        project_color = project_colors.get(project_id)

    return TaskRef(
        id=str(data.get('id', '')),
        title=str(data.get('title') or 'Untitled Task'),
        priority=priority,
        # Older rows only carry scheduledDate
        start_date=parse_date(data.get('startDate') or data.get('scheduledDate')),
        end_date=parse_date(data.get('endDate')),
        completed=parse_bool(data.get('completed', False)),
        project_id=project_id,
        project_color=project_color,
    )
