# File: lifeplanner/services/service_factory.py

from typing import Optional

from lifeplanner.models import CalendarSettings
from lifeplanner.services.api_client import PlannerApiClient
from lifeplanner.services.data_collector import DataCollector
from lifeplanner.utils.logger import setup_logger

logger = setup_logger(__name__)


class ServiceFactory:
    """Factory for creating service instances."""

    @staticmethod
    def create_api_client() -> PlannerApiClient:
        """API client configured from the environment."""
        logger.debug("Creating planner API client")
        return PlannerApiClient()

    @staticmethod
    def create_data_collector(api_client: Optional[PlannerApiClient] = None) -> DataCollector:
        return DataCollector(api_client or ServiceFactory.create_api_client())

    @staticmethod
    def create_calendar_view(
        api_client: Optional[PlannerApiClient] = None,
        settings: Optional[CalendarSettings] = None
    ):
        """
        Create a calendar view wired to the API.

        Args:
            api_client: Existing client to share (default: a new one)
            settings: Calendar constants (default: from Config)

        Returns:
            CalendarView instance
        """
        from lifeplanner.core.calendar_view import CalendarView

        client = api_client or ServiceFactory.create_api_client()
        return CalendarView(
            api_client=client,
            collector=DataCollector(client),
            settings=settings or CalendarSettings.from_config(),
        )
