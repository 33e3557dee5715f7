"""Validation rules of the operation input schemas."""

import pytest
from pydantic import ValidationError

from calendar_todo_mcp import schemas


def test_defaults():
    assert schemas.ListEventsInput().calendar_id == "primary"
    assert schemas.ListTasksInput().tasklist_id == "@default"
    assert schemas.SearchEventsInput(query="x").calendar_ids == ["primary"]


def test_camel_case_aliases_are_accepted():
    params = schemas.ListEventsInput.model_validate({"calendarId": "work", "maxResults": 10})
    assert params.calendar_id == "work"
    assert params.max_results == 10


def test_max_results_bounds():
    with pytest.raises(ValidationError):
        schemas.ListEventsInput.model_validate({"maxResults": 5000})
    with pytest.raises(ValidationError):
        schemas.ListEventsInput.model_validate({"maxResults": 0})
    with pytest.raises(ValidationError):
        schemas.ListTasksInput.model_validate({"maxResults": 101})


def test_search_events_requires_query_and_calendars():
    with pytest.raises(ValidationError):
        schemas.SearchEventsInput.model_validate({"query": ""})
    with pytest.raises(ValidationError):
        schemas.SearchEventsInput.model_validate({"query": "x", "calendarIds": []})


@pytest.mark.parametrize("value", ["key=value", "a b=c d"])
def test_property_filter_accepts(value):
    params = schemas.ListEventsInput.model_validate({"sharedExtendedProperty": [value]})
    assert params.shared_extended_property == [value]


@pytest.mark.parametrize("value", ["novalue", "a=b=c", "=b", "a="])
def test_property_filter_rejects(value):
    with pytest.raises(ValidationError) as exc_info:
        schemas.ListEventsInput.model_validate({"privateExtendedProperty": [value]})
    assert "key=value" in str(exc_info.value)


def test_attendee_rules():
    schemas.Attendee.model_validate({"email": "a@example.com", "additionalGuests": 0})
    with pytest.raises(ValidationError):
        schemas.Attendee.model_validate({"email": "not-an-email"})
    with pytest.raises(ValidationError):
        schemas.Attendee.model_validate({"email": "a@example.com", "additionalGuests": -1})
    with pytest.raises(ValidationError):
        schemas.Attendee.model_validate({"email": "a@example.com", "responseStatus": "maybe"})


def test_reminders_overrides_must_not_be_empty_when_given():
    schemas.Reminders.model_validate({})
    with pytest.raises(ValidationError):
        schemas.Reminders.model_validate({"overrides": []})
    with pytest.raises(ValidationError):
        schemas.Reminders.model_validate({"overrides": [{"method": "sms", "minutes": 5}]})
    with pytest.raises(ValidationError):
        schemas.Reminders.model_validate({"overrides": [{"minutes": -5}]})


def test_attachment_and_source_urls():
    attachment = schemas.Attachment.model_validate({"fileUrl": "https://example.com"})
    assert attachment.file_url == "https://example.com"
    with pytest.raises(ValidationError):
        schemas.Attachment.model_validate({"fileUrl": "not a url"})
    with pytest.raises(ValidationError):
        schemas.Source.model_validate({"title": "Ticket"})


def test_conference_data_must_be_an_object():
    base = {"summary": "s", "start": "2024-01-01", "end": "2024-01-02"}
    schemas.CreateEventInput.model_validate({**base, "conferenceData": {"createRequest": {}}})
    with pytest.raises(ValidationError):
        schemas.CreateEventInput.model_validate({**base, "conferenceData": None})
    with pytest.raises(ValidationError):
        schemas.CreateEventInput.model_validate({**base, "conferenceData": "meet"})


def test_update_rejects_null_summary():
    with pytest.raises(ValidationError):
        schemas.UpdateEventInput.model_validate({"eventId": "e", "summary": None})
    with pytest.raises(ValidationError):
        schemas.UpdateTaskInput.model_validate({"taskId": "t", "title": None})


def test_supplied_tracks_explicit_fields():
    params = schemas.UpdateEventInput.model_validate({"eventId": "e", "description": None})
    assert params.supplied("description")
    assert not params.supplied("location")
    assert not params.supplied("calendar_id")


def test_validation_round_trip_is_stable():
    raw = {
        "calendarId": "work",
        "summary": "Review",
        "start": "2024-01-10T09:00:00Z",
        "end": "2024-01-10T10:00:00Z",
        "attendees": [{"email": "a@example.com", "responseStatus": "accepted"}],
        "reminders": {"overrides": [{"minutes": 5}]},
        "extendedProperties": {"shared": {"k": "v"}},
        "attachments": [{"fileUrl": "https://example.com/doc"}],
        "source": {"title": "Ticket", "url": "https://example.com/t/1"},
        "anyoneCanAddSelf": False,
    }
    first = schemas.CreateEventInput.model_validate(raw)
    dumped = first.to_arguments()
    second = schemas.CreateEventInput.model_validate(dumped)
    assert second.to_arguments() == dumped
    assert dumped == raw


def test_unknown_keys_are_dropped():
    params = schemas.DeleteTaskInput.model_validate({"taskId": "t", "bogus": 1})
    assert "bogus" not in params.to_arguments()


@pytest.mark.parametrize(
    "model, raw",
    [
        (schemas.Attendee, {"email": "a@example.com", "additionalGuests": "2"}),
        (schemas.Attendee, {"email": "a@example.com", "additionalGuests": True}),
        (schemas.Attendee, {"email": "a@example.com", "optional": "yes"}),
        (schemas.ReminderOverride, {"minutes": True}),
        (schemas.ReminderOverride, {"minutes": "10"}),
        (schemas.ListEventsInput, {"maxResults": "25"}),
        (schemas.ListEventsInput, {"singleEvents": "true"}),
        (schemas.ListTasksInput, {"showCompleted": 1}),
    ],
)
def test_integers_and_booleans_are_not_coerced(model, raw):
    with pytest.raises(ValidationError):
        model.model_validate(raw)


def test_integers_and_booleans_accept_native_values():
    attendee = schemas.Attendee.model_validate(
        {"email": "a@example.com", "additionalGuests": 2, "optional": True}
    )
    assert attendee.additional_guests == 2
    assert attendee.optional is True


def test_trailing_newline_is_rejected():
    with pytest.raises(ValidationError):
        schemas.Attendee.model_validate({"email": "a@example.com\n"})
    with pytest.raises(ValidationError):
        schemas.ListEventsInput.model_validate({"privateExtendedProperty": ["k=v\n"]})
