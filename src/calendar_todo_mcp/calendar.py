"""Google Calendar operations: request building and response shaping."""

import logging
import re
from typing import Any

from .backends import CalendarBackend
from .normalize import normalize_calendar, normalize_event
from .schemas import (
    Attendee,
    CommonEventFields,
    CreateEventInput,
    DeleteEventInput,
    DeleteEventInstanceInput,
    ExtendedProperties,
    ListCalendarsInput,
    ListEventInstancesInput,
    ListEventsInput,
    Reminders,
    SearchEventsInput,
    UpdateEventInput,
    UpdateEventInstanceInput,
)

logger = logging.getLogger(__name__)

_DATE_ONLY = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# Common fields copied to the request body as-is, keyed by attribute name.
_PASSTHROUGH_FIELDS = (
    "description",
    "location",
    "color_id",
    "recurrence",
    "transparency",
    "visibility",
    "conference_data",
    "guests_can_invite_others",
    "guests_can_modify",
    "guests_can_see_other_guests",
    "anyone_can_add_self",
)


def to_google_date(value: str, time_zone: str | None = None) -> dict[str, str]:
    """``YYYY-MM-DD`` is an all-day date; anything else is a timestamp."""
    if _DATE_ONLY.fullmatch(value):
        return {"date": value}
    if time_zone:
        return {"dateTime": value, "timeZone": time_zone}
    return {"dateTime": value}


def map_attendees(attendees: list[Attendee]) -> list[dict[str, Any]]:
    return [attendee.model_dump(by_alias=True, exclude_unset=True) for attendee in attendees]


def map_reminders(reminders: Reminders) -> dict[str, Any] | None:
    """Return the request value, or None when nothing meaningful is set."""
    mapped: dict[str, Any] = {}
    if reminders.use_default is not None:
        mapped["useDefault"] = reminders.use_default
    if reminders.overrides:
        mapped["overrides"] = [
            {"method": override.method or "popup", "minutes": override.minutes}
            for override in reminders.overrides
        ]
    return mapped or None


def map_extended_properties(properties: ExtendedProperties) -> dict[str, Any] | None:
    mapped = {}
    if properties.private:
        mapped["private"] = properties.private
    if properties.shared:
        mapped["shared"] = properties.shared
    return mapped or None


def _wire_name(field_name: str) -> str:
    return CommonEventFields.model_fields[field_name].alias or field_name


def apply_common_event_fields(body: dict[str, Any], params: CommonEventFields) -> dict[str, Any]:
    """Copy every supplied common field into ``body``.

    Fields the caller left out are never written, so a patch cannot clobber
    state it did not mention. An explicit null is forwarded and clears the
    field on the provider side.
    """
    for name in _PASSTHROUGH_FIELDS:
        if params.supplied(name):
            body[_wire_name(name)] = getattr(params, name)

    if params.supplied("attendees"):
        attendees = params.attendees
        body["attendees"] = None if attendees is None else map_attendees(attendees)

    if params.supplied("reminders"):
        if params.reminders is None:
            body["reminders"] = None
        else:
            reminders = map_reminders(params.reminders)
            if reminders is not None:
                body["reminders"] = reminders

    if params.supplied("extended_properties"):
        if params.extended_properties is None:
            body["extendedProperties"] = None
        else:
            properties = map_extended_properties(params.extended_properties)
            if properties is not None:
                body["extendedProperties"] = properties

    if params.supplied("attachments"):
        attachments = params.attachments
        body["attachments"] = (
            None
            if attachments is None
            else [item.model_dump(by_alias=True, exclude_unset=True) for item in attachments]
        )

    if params.supplied("source"):
        source = params.source
        body["source"] = None if source is None else source.model_dump(by_alias=True)

    return body


def _write_options(params: CommonEventFields, send_updates: str | None) -> dict[str, Any]:
    return {
        "sendUpdates": send_updates,
        "supportsAttachments": True if params.attachments else None,
        "conferenceDataVersion": 1 if params.conference_data is not None else None,
    }


def _patch_body(params: UpdateEventInput | UpdateEventInstanceInput) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if params.supplied("summary"):
        body["summary"] = params.summary
    if params.supplied("start"):
        body["start"] = to_google_date(params.start, params.time_zone)
    if params.supplied("end"):
        body["end"] = to_google_date(params.end, params.time_zone)
    return apply_common_event_fields(body, params)


async def list_calendars(backend: CalendarBackend, params: ListCalendarsInput) -> dict:
    """List all calendars available to the authenticated user."""
    response = await backend.list_calendars()
    return {"calendars": [normalize_calendar(item) for item in response.get("items", [])]}


async def list_events(backend: CalendarBackend, params: ListEventsInput) -> dict:
    response = await backend.list_events(
        params.calendar_id,
        timeMin=params.time_min,
        timeMax=params.time_max,
        maxResults=params.max_results,
        q=params.query,
        singleEvents=params.single_events,
        orderBy=params.order_by,
        showDeleted=params.show_deleted,
        timeZone=params.time_zone,
        pageToken=params.page_token,
        syncToken=params.sync_token,
        privateExtendedProperty=params.private_extended_property,
        sharedExtendedProperty=params.shared_extended_property,
    )
    return {
        "events": [normalize_event(item) for item in response.get("items", [])],
        "nextPageToken": response.get("nextPageToken"),
        "nextSyncToken": response.get("nextSyncToken"),
    }


async def search_events(backend: CalendarBackend, params: SearchEventsInput) -> dict:
    """Search each calendar in turn.

    Calendars are queried sequentially in the order given; the first failure
    propagates and no partial results are returned.
    """
    results = []
    for calendar_id in params.calendar_ids:
        response = await backend.list_events(
            calendar_id,
            q=params.query,
            timeMin=params.time_min,
            timeMax=params.time_max,
            maxResults=params.max_results_per_calendar,
            timeZone=params.time_zone,
            orderBy=params.order_by,
            showDeleted=params.show_deleted,
            singleEvents=params.single_events,
            privateExtendedProperty=params.private_extended_property,
            sharedExtendedProperty=params.shared_extended_property,
        )
        results.append(
            {
                "calendarId": calendar_id,
                "events": [normalize_event(item) for item in response.get("items", [])],
                "nextPageToken": response.get("nextPageToken"),
            }
        )

    return {
        "query": params.query,
        "totalEvents": sum(len(entry["events"]) for entry in results),
        "calendars": results,
    }


async def create_event(backend: CalendarBackend, params: CreateEventInput) -> dict:
    body: dict[str, Any] = {
        "summary": params.summary,
        "start": to_google_date(params.start, params.time_zone),
        "end": to_google_date(params.end, params.time_zone),
    }
    if params.event_id:
        body["id"] = params.event_id
    apply_common_event_fields(body, params)

    created = await backend.insert_event(
        params.calendar_id, body, **_write_options(params, params.send_updates)
    )
    logger.info("Created event %s on %s", created.get("id"), params.calendar_id)
    return {"event": normalize_event(created)}


async def update_event(backend: CalendarBackend, params: UpdateEventInput) -> dict:
    """Patch an event or a whole recurring series. Only supplied fields change."""
    updated = await backend.patch_event(
        params.calendar_id,
        params.event_id,
        _patch_body(params),
        **_write_options(params, params.send_updates),
    )
    return {"event": normalize_event(updated)}


async def list_event_instances(backend: CalendarBackend, params: ListEventInstancesInput) -> dict:
    response = await backend.get_instances(
        params.calendar_id,
        params.recurring_event_id,
        timeMin=params.time_min,
        timeMax=params.time_max,
        maxResults=params.max_results,
        pageToken=params.page_token,
        showDeleted=params.show_deleted,
        timeZone=params.time_zone,
    )
    return {
        "instances": [normalize_event(item) for item in response.get("items", [])],
        "nextPageToken": response.get("nextPageToken"),
    }


async def update_event_instance(backend: CalendarBackend, params: UpdateEventInstanceInput) -> dict:
    updated = await backend.patch_event(
        params.calendar_id,
        params.instance_id,
        _patch_body(params),
        **_write_options(params, params.send_updates),
    )
    return {"event": normalize_event(updated)}


async def delete_event(backend: CalendarBackend, params: DeleteEventInput) -> dict:
    await backend.delete_event(params.calendar_id, params.event_id, sendUpdates=params.send_updates)
    logger.info("Deleted event %s from %s", params.event_id, params.calendar_id)
    return {"success": True}


async def delete_event_instance(backend: CalendarBackend, params: DeleteEventInstanceInput) -> dict:
    # A single occurrence is deleted through the same call, keyed by its instance id.
    await backend.delete_event(params.calendar_id, params.instance_id, sendUpdates=params.send_updates)
    logger.info("Deleted instance %s from %s", params.instance_id, params.calendar_id)
    return {"success": True}
