# File: lifeplanner/services/data_collector.py

from typing import Dict, List, TypedDict

from lifeplanner.models import SourceEvent, TaskRef, event_from_dict, task_from_dict
from lifeplanner.services.api_client import PlannerApiClient, list_payload
from lifeplanner.utils.logger import setup_logger

logger = setup_logger(__name__)


class CollectedData(TypedDict):
    events: List[SourceEvent]
    tasks: List[TaskRef]
    errors: Dict[str, str]


class DataCollector:
    """Collects calendar data from the API and converts it to typed models."""

    def __init__(self, api_client: PlannerApiClient):
        """
        Initialize data collector.

        Args:
            api_client: Client for the planner persistence API
        """
        self.api = api_client
        self.logger = setup_logger(__name__)

    def collect_project_colors(self) -> Dict[str, str]:
        """Map of project id to display color."""
        colors: Dict[str, str] = {}
        for project in list_payload(self.api.get_projects()):
            color = project.get('color')
            if project.get('id') is not None and color:
                colors[str(project['id'])] = str(color)
        return colors

    def collect_calendar_data(self) -> CollectedData:
        """
        Fetch events, tasks and project colors and convert them into models.

        Records that fail to convert are skipped with an error log. Failed
        requests are reported in ``errors`` instead of raising.

        Returns:
            Dictionary with typed ``events`` and ``tasks`` plus request errors keyed by resource
        """
        self.logger.info("Collecting calendar data")
        errors: Dict[str, str] = {}

        # 1. Events
        events_result = self.api.get_events()
        if not events_result.is_success():
            errors["events"] = f"Could not load events: {events_result.message}"

        events: List[SourceEvent] = []
        for raw_event in list_payload(events_result):
            try:
                events.append(event_from_dict(raw_event))
            except (ValueError, TypeError) as e:
                self.logger.error(
                    f"Failed to convert event {raw_event.get('title', 'Unknown')}: {e}"
                )

        # 2. Tasks, colored by their project
        tasks_result = self.api.get_tasks()
        if not tasks_result.is_success():
            errors["tasks"] = f"Could not load tasks: {tasks_result.message}"

        project_colors = self.collect_project_colors() if tasks_result.is_success() else {}

        tasks: List[TaskRef] = []
        for raw_task in list_payload(tasks_result):
            try:
                tasks.append(task_from_dict(raw_task, project_colors))
            except (ValueError, TypeError) as e:
                self.logger.error(
                    f"Failed to convert task {raw_task.get('title', 'Unknown')}: {e}"
                )

        self.logger.info(
            f"Collection finished: {len(events)} events, {len(tasks)} tasks, "
            f"{len(errors)} errors"
        )

        return {
            'events': events,
            'tasks': tasks,
            'errors': errors,
        }
