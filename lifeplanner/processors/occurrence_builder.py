# File: lifeplanner/processors/occurrence_builder.py
"""
Occurrence materialization module.
Combines expanded events and dated tasks into one renderable list.
"""

from typing import Iterable, List, Optional

from lifeplanner.models import CalendarSettings, Occurrence, SourceEvent, TaskRef
from lifeplanner.processors.recurrence_expander import RecurrenceExpander
from lifeplanner.utils.logger import setup_logger

logger = setup_logger(__name__)


class OccurrenceBuilder:
    """Projects source events and tasks onto the calendar."""

    def __init__(self, settings: Optional[CalendarSettings] = None):
        self.settings = settings or CalendarSettings()
        self.expander = RecurrenceExpander(self.settings)

    def task_occurrence(self, task: TaskRef) -> Occurrence:
        """All-day, read-only occurrence for a dated task."""
        start, end = task.calendar_bounds()
        return Occurrence.for_task(
            id=f"task-{task.id}",
            source_id=task.id,
            title=task.title,
            start=start,
            end=end,
            color=task.project_color or self.settings.task_color,
            priority=task.priority,
            completed=task.completed,
        )

    def build(
        self,
        events: Iterable[SourceEvent],
        tasks: Iterable[TaskRef] = ()
    ) -> List[Occurrence]:
        """
        Materialize every event and dated task.

        Events come first in input order, each followed by its generated
        instances; dated tasks follow. Undated tasks are skipped.

        Args:
            events: Source events from the API
            tasks: Task references from the API

        Returns:
            Ordered list of occurrences
        """
        occurrences: List[Occurrence] = []

        event_count = 0
        for event in events:
            occurrences.extend(self.expander.expand(event))
            event_count += 1

        task_count = 0
        for task in tasks:
            if not task.is_scheduled:
                continue
            occurrences.append(self.task_occurrence(task))
            task_count += 1

        logger.info(
            f"Materialized {len(occurrences)} occurrences "
            f"from {event_count} events and {task_count} dated tasks"
        )
        return occurrences
