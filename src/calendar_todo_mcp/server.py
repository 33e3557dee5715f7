"""MCP server exposing the calendar and task operations."""

import logging
from functools import partial
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from . import calendar as cal
from . import tasks
from . import schemas
from .auth import get_credentials
from .backends import CalendarBackend, TaskBackend
from .registry import OperationRegistry

logger = logging.getLogger(__name__)

SERVER_NAME = "google-calendar-todo"

CALENDAR_OPERATIONS = (
    ("list-calendars", "List all calendars available to the authenticated user.",
     schemas.ListCalendarsInput, cal.list_calendars),
    ("list-events", "List events from a calendar with optional filtering and pagination.",
     schemas.ListEventsInput, cal.list_events),
    ("search-events", "Search events across one or more calendars with advanced filters.",
     schemas.SearchEventsInput, cal.search_events),
    ("create-event", "Create a new calendar event, including support for recurrence and advanced options.",
     schemas.CreateEventInput, cal.create_event),
    ("update-event", "Update an existing calendar event or recurring series.",
     schemas.UpdateEventInput, cal.update_event),
    ("list-event-instances", "List all instances of a recurring event.",
     schemas.ListEventInstancesInput, cal.list_event_instances),
    ("update-event-instance", "Update a single occurrence of a recurring event.",
     schemas.UpdateEventInstanceInput, cal.update_event_instance),
    ("delete-event", "Delete a calendar event or recurring series.",
     schemas.DeleteEventInput, cal.delete_event),
    ("delete-event-instance", "Delete a single occurrence of a recurring event.",
     schemas.DeleteEventInstanceInput, cal.delete_event_instance),
)

TASK_OPERATIONS = (
    ("list-tasklists", "List all Google Task lists available to the authenticated user.",
     schemas.ListTaskListsInput, tasks.list_task_lists),
    ("list-tasks", "List tasks from a task list.",
     schemas.ListTasksInput, tasks.list_tasks),
    ("create-task", "Create a new task in the specified task list.",
     schemas.CreateTaskInput, tasks.create_task),
    ("update-task", "Update a task in the specified task list.",
     schemas.UpdateTaskInput, tasks.update_task),
    ("complete-task", "Mark a task as completed.",
     schemas.CompleteTaskInput, tasks.complete_task),
    ("delete-task", "Delete a task from the specified task list.",
     schemas.DeleteTaskInput, tasks.delete_task),
)


def build_registry(calendar_backend: CalendarBackend, task_backend: TaskBackend) -> OperationRegistry:
    registry = OperationRegistry()
    for name, description, model, handler in CALENDAR_OPERATIONS:
        registry.register(name, description, model, partial(handler, calendar_backend))
    for name, description, model, handler in TASK_OPERATIONS:
        registry.register(name, description, model, partial(handler, task_backend))
    return registry.freeze()


def create_server(registry: OperationRegistry, version: str | None = None) -> Server:
    server = Server(SERVER_NAME, version=version)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(name=op.name, description=op.description, inputSchema=op.input_schema())
            for op in registry.operations.values()
        ]

    # Arguments are validated by each operation's own schema inside the registry.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        return await registry.invoke(name, arguments)

    return server


async def serve(version: str | None = None) -> None:
    """Authorize, register every operation, and serve over stdio."""
    creds = get_credentials()
    registry = build_registry(
        CalendarBackend.from_credentials(creds),
        TaskBackend.from_credentials(creds),
    )
    server = create_server(registry, version)
    logger.info("Serving %d operations over stdio", len(registry.operations))
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
