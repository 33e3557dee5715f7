"""Thin async wrappers over the Google Calendar v3 and Tasks v1 clients.

Every method issues exactly one request. The discovery client is blocking,
so ``execute()`` runs in a worker thread and callers only suspend there.
"""

import asyncio
import logging
from typing import Any

from googleapiclient.discovery import build

logger = logging.getLogger(__name__)


def _compact(params: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None}


async def _execute(request) -> Any:
    return await asyncio.to_thread(request.execute)


class CalendarBackend:
    """Google Calendar API wrapper."""

    def __init__(self, service) -> None:
        self._service = service

    @classmethod
    def from_credentials(cls, credentials) -> "CalendarBackend":
        return cls(build("calendar", "v3", credentials=credentials, cache_discovery=False))

    async def list_calendars(self) -> dict:
        return await _execute(self._service.calendarList().list())

    async def list_events(self, calendar_id: str, **filters) -> dict:
        logger.debug("events.list calendarId=%s", calendar_id)
        request = self._service.events().list(calendarId=calendar_id, **_compact(filters))
        return await _execute(request)

    async def get_instances(self, calendar_id: str, event_id: str, **filters) -> dict:
        request = self._service.events().instances(
            calendarId=calendar_id, eventId=event_id, **_compact(filters)
        )
        return await _execute(request)

    async def insert_event(self, calendar_id: str, body: dict, **options) -> dict:
        request = self._service.events().insert(
            calendarId=calendar_id, body=body, **_compact(options)
        )
        return await _execute(request)

    async def patch_event(self, calendar_id: str, event_id: str, body: dict, **options) -> dict:
        request = self._service.events().patch(
            calendarId=calendar_id, eventId=event_id, body=body, **_compact(options)
        )
        return await _execute(request)

    async def delete_event(self, calendar_id: str, event_id: str, **options) -> None:
        request = self._service.events().delete(
            calendarId=calendar_id, eventId=event_id, **_compact(options)
        )
        await _execute(request)


class TaskBackend:
    """Google Tasks API wrapper."""

    def __init__(self, service) -> None:
        self._service = service

    @classmethod
    def from_credentials(cls, credentials) -> "TaskBackend":
        return cls(build("tasks", "v1", credentials=credentials, cache_discovery=False))

    async def list_task_lists(self, **filters) -> dict:
        return await _execute(self._service.tasklists().list(**_compact(filters)))

    async def list_tasks(self, tasklist_id: str, **filters) -> dict:
        request = self._service.tasks().list(tasklist=tasklist_id, **_compact(filters))
        return await _execute(request)

    async def insert_task(self, tasklist_id: str, body: dict) -> dict:
        return await _execute(self._service.tasks().insert(tasklist=tasklist_id, body=body))

    async def patch_task(self, tasklist_id: str, task_id: str, body: dict) -> dict:
        request = self._service.tasks().patch(tasklist=tasklist_id, task=task_id, body=body)
        return await _execute(request)

    async def delete_task(self, tasklist_id: str, task_id: str) -> None:
        await _execute(self._service.tasks().delete(tasklist=tasklist_id, task=task_id))
