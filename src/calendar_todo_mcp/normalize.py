"""Map raw Google Calendar / Tasks resources into stable response shapes."""

from typing import Any

EVENT_FIELDS = (
    "id",
    "status",
    "summary",
    "description",
    "location",
    "start",
    "end",
    "recurrence",
    "recurringEventId",
    "originalStartTime",
    "creator",
    "organizer",
    "attendees",
    "htmlLink",
    "hangoutLink",
    "conferenceData",
    "attachments",
    "transparency",
    "visibility",
    "colorId",
    "reminders",
    "updated",
    "created",
)

TASK_LIST_FIELDS = ("id", "title", "updated")


def _pick(raw: dict, fields) -> dict[str, Any]:
    """Copy only the fields present on ``raw``; absent ones stay absent."""
    return {field: raw[field] for field in fields if field in raw}


def normalize_event(event: dict) -> dict[str, Any]:
    """Every event field is always present; missing ones are ``None``."""
    return {field: event.get(field) for field in EVENT_FIELDS}


def normalize_calendar(entry: dict) -> dict[str, Any]:
    result = _pick(entry, ("id", "summary"))
    result.update(
        {
            "description": entry.get("description"),
            "timeZone": entry.get("timeZone"),
            "primary": bool(entry.get("primary", False)),
            "accessRole": entry.get("accessRole"),
        }
    )
    return result


def normalize_task_list(task_list: dict) -> dict[str, Any]:
    return _pick(task_list, TASK_LIST_FIELDS)


def normalize_task(task: dict) -> dict[str, Any]:
    return {
        **_pick(task, ("id", "title")),
        "notes": task.get("notes"),
        **_pick(task, ("status",)),
        "due": task.get("due"),
        "completed": task.get("completed"),
        **_pick(task, ("updated",)),
    }
