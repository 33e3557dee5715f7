"""Input schemas for every calendar and task operation.

Shared fragments (attendees, reminders, extended properties, attachments,
source, conference data) are declared once and composed into the
per-operation models through ``CommonEventFields``, so create, update and
instance-update validate those substructures identically.

Field names are snake_case in Python and camelCase on the wire. Whether the
caller supplied an optional field is read from ``model_fields_set``; handlers
forward only supplied fields to the backend.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    TypeAdapter,
    field_validator,
)
from pydantic.alias_generators import to_camel

_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_PROPERTY_FILTER_PATTERN = re.compile(r"[^=]+=[^=]+")
_URL_ADAPTER = TypeAdapter(AnyUrl)


def _check_email(value: str) -> str:
    if not _EMAIL_PATTERN.fullmatch(value):
        raise ValueError("Invalid email address")
    return value


def _check_url(value: str) -> str:
    # Validate with pydantic but keep the caller's exact string.
    _URL_ADAPTER.validate_python(value)
    return value


def _check_property_filter(value: str) -> str:
    if not _PROPERTY_FILTER_PATTERN.fullmatch(value):
        raise ValueError("Must be in key=value format")
    return value


Email = Annotated[str, AfterValidator(_check_email)]
Url = Annotated[str, AfterValidator(_check_url)]
PropertyFilter = Annotated[str, AfterValidator(_check_property_filter)]
EventMaxResults = Annotated[int, Field(ge=1, le=2500, strict=True)]
TaskMaxResults = Annotated[int, Field(ge=1, le=100, strict=True)]
NonNegativeInt = Annotated[int, Field(ge=0, strict=True)]

SendUpdates = Literal["all", "externalOnly", "none"]
OrderBy = Literal["startTime", "updated"]
TaskStatus = Literal["needsAction", "completed"]


class InputModel(BaseModel):
    """Base for all operation inputs: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def supplied(self, field_name: str) -> bool:
        return field_name in self.model_fields_set

    def to_arguments(self) -> dict[str, Any]:
        """Dump back to wire form, keeping only what the caller supplied."""
        return self.model_dump(by_alias=True, exclude_unset=True)


# ---------------------------------------------------------------------------
# Shared fragments
# ---------------------------------------------------------------------------


class Attendee(InputModel):
    email: Email
    optional: StrictBool | None = None
    display_name: str | None = None
    response_status: Literal["needsAction", "declined", "tentative", "accepted"] | None = None
    comment: str | None = None
    additional_guests: NonNegativeInt | None = None


class ReminderOverride(InputModel):
    # Missing method becomes "popup" when the request is built.
    method: Literal["email", "popup"] | None = None
    minutes: NonNegativeInt


class Reminders(InputModel):
    use_default: StrictBool | None = None
    overrides: Annotated[list[ReminderOverride], Field(min_length=1)] | None = None


class ExtendedProperties(InputModel):
    private: dict[str, str] | None = None
    shared: dict[str, str] | None = None


class Attachment(InputModel):
    file_url: Url
    title: str | None = None
    mime_type: str | None = None
    icon_link: Url | None = None
    file_id: str | None = None


class Source(InputModel):
    title: str
    url: Url


class CommonEventFields(InputModel):
    description: str | None = None
    location: str | None = None
    color_id: str | None = None
    recurrence: list[str] | None = None
    transparency: Literal["opaque", "transparent"] | None = None
    visibility: Literal["default", "public", "private", "confidential"] | None = None
    attendees: list[Attendee] | None = None
    reminders: Reminders | None = None
    conference_data: dict[str, Any] | None = None
    extended_properties: ExtendedProperties | None = None
    guests_can_invite_others: StrictBool | None = None
    guests_can_modify: StrictBool | None = None
    guests_can_see_other_guests: StrictBool | None = None
    anyone_can_add_self: StrictBool | None = None
    attachments: list[Attachment] | None = None
    source: Source | None = None

    @field_validator("conference_data")
    @classmethod
    def _conference_data_is_object(cls, value: dict[str, Any] | None) -> dict[str, Any]:
        if value is None:
            raise ValueError("conferenceData must be an object")
        return value


# ---------------------------------------------------------------------------
# Calendar operations
# ---------------------------------------------------------------------------


class ListCalendarsInput(InputModel):
    pass


class ListEventsInput(InputModel):
    calendar_id: str = "primary"
    time_min: str | None = None
    time_max: str | None = None
    max_results: EventMaxResults | None = None
    query: str | None = None
    single_events: StrictBool | None = None
    order_by: OrderBy | None = None
    show_deleted: StrictBool | None = None
    time_zone: str | None = None
    page_token: str | None = None
    sync_token: str | None = None
    private_extended_property: list[PropertyFilter] | None = None
    shared_extended_property: list[PropertyFilter] | None = None


class SearchEventsInput(InputModel):
    calendar_ids: Annotated[list[str], Field(min_length=1)] = Field(default_factory=lambda: ["primary"])
    query: Annotated[str, Field(min_length=1)]
    time_min: str | None = None
    time_max: str | None = None
    max_results_per_calendar: EventMaxResults | None = None
    time_zone: str | None = None
    order_by: OrderBy | None = None
    show_deleted: StrictBool | None = None
    single_events: StrictBool | None = None
    private_extended_property: list[PropertyFilter] | None = None
    shared_extended_property: list[PropertyFilter] | None = None


class CreateEventInput(CommonEventFields):
    calendar_id: str = "primary"
    summary: str
    start: str
    end: str
    time_zone: str | None = None
    event_id: str | None = None
    send_updates: SendUpdates | None = None


class _EventPatchFields(CommonEventFields):
    calendar_id: str = "primary"
    summary: str | None = None
    start: str | None = None
    end: str | None = None
    time_zone: str | None = None
    send_updates: SendUpdates | None = None

    @field_validator("summary", "start", "end")
    @classmethod
    def _not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class UpdateEventInput(_EventPatchFields):
    event_id: str


class UpdateEventInstanceInput(_EventPatchFields):
    instance_id: str


class ListEventInstancesInput(InputModel):
    calendar_id: str = "primary"
    recurring_event_id: str
    time_min: str | None = None
    time_max: str | None = None
    max_results: EventMaxResults | None = None
    page_token: str | None = None
    show_deleted: StrictBool | None = None
    time_zone: str | None = None


class DeleteEventInput(InputModel):
    calendar_id: str = "primary"
    event_id: str
    send_updates: SendUpdates | None = None


class DeleteEventInstanceInput(InputModel):
    calendar_id: str = "primary"
    instance_id: str
    send_updates: SendUpdates | None = None


# ---------------------------------------------------------------------------
# Task operations
# ---------------------------------------------------------------------------


class ListTaskListsInput(InputModel):
    pass


class ListTasksInput(InputModel):
    tasklist_id: str = "@default"
    show_completed: StrictBool | None = None
    show_deleted: StrictBool | None = None
    max_results: TaskMaxResults | None = None
    due_min: str | None = None
    due_max: str | None = None


class CreateTaskInput(InputModel):
    tasklist_id: str = "@default"
    title: str
    notes: str | None = None
    due: str | None = None


class UpdateTaskInput(InputModel):
    tasklist_id: str = "@default"
    task_id: str
    title: str | None = None
    notes: str | None = None
    due: str | None = None
    status: TaskStatus | None = None

    @field_validator("title", "status")
    @classmethod
    def _not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class TaskRefInput(InputModel):
    tasklist_id: str = "@default"
    task_id: str


class CompleteTaskInput(TaskRefInput):
    pass


class DeleteTaskInput(TaskRefInput):
    pass
