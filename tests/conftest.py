# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable test data and mocks for all tests.
"""

import pytest
from datetime import date, time
from pathlib import Path
from unittest.mock import Mock
import sys

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from lifeplanner.models import (
    ApiResponse, CalendarSettings, EventPriority, RecurrenceKind, RecurrenceRule,
    SourceEvent, TaskPriority, TaskRef
)
from lifeplanner.processors.occurrence_builder import OccurrenceBuilder


# ==================== Configuration Fixtures ====================

@pytest.fixture
def settings():
    """Default calendar constants."""
    return CalendarSettings()


@pytest.fixture
def builder(settings):
    """Occurrence builder with default settings."""
    return OccurrenceBuilder(settings)


# ==================== Event Fixtures ====================

@pytest.fixture
def timed_event():
    """A single timed event on 2024-01-10, 09:00 to 10:30."""
    return SourceEvent(
        id="1",
        title="Team sync",
        start_date=date(2024, 1, 10),
        end_date=date(2024, 1, 10),
        start_time=time(9, 0),
        end_time=time(10, 30),
        priority=EventPriority.HIGH,
    )


@pytest.fixture
def all_day_event():
    """A two-day all-day event."""
    return SourceEvent(
        id="2",
        title="Offsite",
        start_date=date(2024, 1, 15),
        end_date=date(2024, 1, 16),
        all_day=True,
        extra={'coreValue': 'growth', 'imageUrls': []},
    )


@pytest.fixture
def daily_event():
    """Every second day from Jan 1 through Jan 7, 08:00 to 08:30."""
    return SourceEvent(
        id="7",
        title="Run",
        start_date=date(2024, 1, 1),
        start_time=time(8, 0),
        end_time=time(8, 30),
        recurrence=RecurrenceRule(
            kind=RecurrenceKind.DAILY,
            interval=2,
            end_date=date(2024, 1, 7),
        ),
    )


@pytest.fixture
def event_record():
    """Raw API record of a weekly event."""
    return {
        'id': 42,
        'title': 'Piano lesson',
        'description': 'Bring sheet music',
        'startDate': '2024-01-01',
        'endDate': '2024-01-01',
        'startTime': '18:00',
        'endTime': '19:00',
        'isAllDay': False,
        'priority': 'low',
        'completed': False,
        'repeatType': 'weekly',
        'repeatInterval': 1,
        'repeatEndDate': '2024-01-31',
        'repeatWeekdays': '["1","3"]',
        'coreValue': 'music',
        'userId': 1,
    }


# ==================== Task Fixtures ====================

@pytest.fixture
def dated_task():
    """A task scheduled on 2024-01-12 in a colored project."""
    return TaskRef(
        id="9",
        title="Write report",
        priority=TaskPriority.A,
        start_date=date(2024, 1, 12),
        project_id="3",
        project_color="#10B981",
    )


@pytest.fixture
def undated_task():
    """A task without dates; never shown on the calendar."""
    return TaskRef(id="10", title="Someday", priority=TaskPriority.C)


# ==================== Mock Fixtures ====================

@pytest.fixture
def mock_api_client():
    """API client mock whose calls all succeed with empty lists."""
    client = Mock()
    client.get_events.return_value = ApiResponse.ok([])
    client.get_tasks.return_value = ApiResponse.ok([])
    client.get_projects.return_value = ApiResponse.ok([])
    client.create_event.return_value = ApiResponse.ok({'id': 100})
    client.update_event.return_value = ApiResponse.ok({})
    client.delete_event.return_value = ApiResponse.ok()
    client.set_event_completed.return_value = ApiResponse.ok({})
    client.set_task_completed.return_value = ApiResponse.ok({})
    return client


@pytest.fixture
def today():
    """Reference date for view tests."""
    return date(2024, 1, 10)


# ==================== Pytest Configuration ====================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
