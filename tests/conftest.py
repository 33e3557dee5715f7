"""Shared fixtures for tests."""

import pytest
from unittest.mock import MagicMock

from calendar_todo_mcp.backends import CalendarBackend, TaskBackend


@pytest.fixture
def mock_credentials():
    """Mock Google OAuth credentials."""
    creds = MagicMock()
    creds.valid = True
    creds.expired = False
    creds.refresh_token = "mock_refresh"
    return creds


@pytest.fixture
def mock_calendar_service():
    """Mock Google Calendar API service. Configure via ``.return_value`` chains
    so that setup does not record calls."""
    service = MagicMock()
    events = service.events.return_value
    events.list.return_value.execute.return_value = {"items": []}
    events.instances.return_value.execute.return_value = {"items": []}
    events.insert.return_value.execute.return_value = {"id": "ev1"}
    events.patch.return_value.execute.return_value = {"id": "ev1"}
    events.delete.return_value.execute.return_value = ""
    service.calendarList.return_value.list.return_value.execute.return_value = {"items": []}
    return service


@pytest.fixture
def mock_tasks_service():
    """Mock Google Tasks API service."""
    service = MagicMock()
    service.tasklists.return_value.list.return_value.execute.return_value = {"items": []}
    tasks = service.tasks.return_value
    tasks.list.return_value.execute.return_value = {"items": []}
    tasks.insert.return_value.execute.return_value = {"id": "t1"}
    tasks.patch.return_value.execute.return_value = {"id": "t1"}
    tasks.delete.return_value.execute.return_value = ""
    return service


@pytest.fixture
def calendar_backend(mock_calendar_service):
    return CalendarBackend(mock_calendar_service)


@pytest.fixture
def task_backend(mock_tasks_service):
    return TaskBackend(mock_tasks_service)

