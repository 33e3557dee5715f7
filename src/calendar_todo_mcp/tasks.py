"""Google Tasks operations."""

import logging
from datetime import datetime, timezone
from typing import Any

from .backends import TaskBackend
from .normalize import normalize_task, normalize_task_list
from .schemas import (
    CompleteTaskInput,
    CreateTaskInput,
    DeleteTaskInput,
    ListTaskListsInput,
    ListTasksInput,
    UpdateTaskInput,
)

logger = logging.getLogger(__name__)

TASK_LISTS_PAGE_SIZE = 100


def _completion_timestamp() -> str:
    """RFC 3339 UTC timestamp for the moment a task is marked completed."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


async def list_task_lists(backend: TaskBackend, params: ListTaskListsInput) -> dict:
    response = await backend.list_task_lists(maxResults=TASK_LISTS_PAGE_SIZE)
    return {
        "tasklists": [normalize_task_list(item) for item in response.get("items", [])],
        "nextPageToken": response.get("nextPageToken"),
    }


async def list_tasks(backend: TaskBackend, params: ListTasksInput) -> dict:
    response = await backend.list_tasks(
        params.tasklist_id,
        showCompleted=params.show_completed,
        showDeleted=params.show_deleted,
        maxResults=params.max_results,
        dueMin=params.due_min,
        dueMax=params.due_max,
    )
    return {
        "tasks": [normalize_task(item) for item in response.get("items", [])],
        "nextPageToken": response.get("nextPageToken"),
    }


async def create_task(backend: TaskBackend, params: CreateTaskInput) -> dict:
    body: dict[str, Any] = {"title": params.title}
    for name in ("notes", "due"):
        if params.supplied(name):
            body[name] = getattr(params, name)
    created = await backend.insert_task(params.tasklist_id, body)
    logger.info("Created task %s in %s", created.get("id"), params.tasklist_id)
    return {"task": normalize_task(created)}


async def update_task(backend: TaskBackend, params: UpdateTaskInput) -> dict:
    """Patch a task. Setting status to completed stamps the completion time."""
    body: dict[str, Any] = {}
    for name in ("title", "notes", "due", "status"):
        if params.supplied(name):
            body[name] = getattr(params, name)
    if body.get("status") == "completed":
        body["completed"] = _completion_timestamp()

    updated = await backend.patch_task(params.tasklist_id, params.task_id, body)
    return {"task": normalize_task(updated)}


async def complete_task(backend: TaskBackend, params: CompleteTaskInput) -> dict:
    body = {"status": "completed", "completed": _completion_timestamp()}
    updated = await backend.patch_task(params.tasklist_id, params.task_id, body)
    logger.info("Completed task %s in %s", params.task_id, params.tasklist_id)
    return {"task": normalize_task(updated)}


async def delete_task(backend: TaskBackend, params: DeleteTaskInput) -> dict:
    await backend.delete_task(params.tasklist_id, params.task_id)
    logger.info("Deleted task %s from %s", params.task_id, params.tasklist_id)
    return {"success": True}
