from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from conftest import UTC, at, row
from routes.schedule_form import ScheduleForm
from routes.schedule_item import build_item
from routes.schedule_time import format_date, parse_input_value, to_input_value

SEOUL = ZoneInfo("Asia/Seoul")
EMPTY = {"title": "", "description": "", "start_time": "", "end_time": ""}


def test_new_form_starts_empty() -> None:
    form = ScheduleForm(tz=UTC)
    form.show()

    assert form.open is True
    assert form.is_editing is False
    assert form.fields == EMPTY


def test_edit_prefills_local_values() -> None:
    schedule = row("7", "Planning", at(2025, 1, 6, 0, 30), at(2025, 1, 6, 1, 30))
    form = ScheduleForm(tz=SEOUL)

    form.show(schedule)

    assert form.editing == schedule
    assert form.fields == {
        "title": "Planning",
        "description": "",
        "start_time": "2025-01-06T09:30",
        "end_time": "2025-01-06T10:30",
    }


def test_submit_emits_payload_and_clears_fields() -> None:
    form = ScheduleForm(tz=SEOUL)
    form.show()

    payload = form.submit({
        "title": "Standup",
        "description": "Daily sync",
        "start_time": "2025-01-06T09:00",
        "end_time": "2025-01-06T09:15",
    })

    assert payload.title == "Standup"
    assert payload.description == "Daily sync"
    assert payload.start_time == at(2025, 1, 6, 0, 0)
    assert payload.end_time == at(2025, 1, 6, 0, 15)
    assert "id" not in payload.model_dump()
    assert form.fields == EMPTY


@pytest.mark.parametrize("missing", ["title", "start_time", "end_time"])
def test_required_fields(missing) -> None:
    form = ScheduleForm(tz=UTC)
    form.show()
    values = {"title": "T", "start_time": "2025-01-06T09:00", "end_time": "2025-01-06T10:00", missing: ""}

    with pytest.raises(ValidationError):
        form.submit(values)

    # posted values stay so the dialog can show them again
    assert form.fields["title"] == values["title"]


def test_unparseable_time_is_rejected() -> None:
    form = ScheduleForm(tz=UTC)
    with pytest.raises(ValidationError):
        form.submit({"title": "T", "start_time": "tomorrow", "end_time": "2025-01-06T10:00"})


def test_dismiss_resets_everything() -> None:
    form = ScheduleForm(tz=UTC)
    form.show(row("1", "X", at(2025, 1, 6, 9), at(2025, 1, 6, 10), description="d"))

    form.dismiss()

    assert form.open is False
    assert form.editing is None
    assert form.fields == EMPTY


def test_time_helpers() -> None:
    assert to_input_value(None) == ""
    assert to_input_value(at(2025, 1, 6, 9, 5), UTC) == "2025-01-06T09:05"
    assert parse_input_value("2025-01-06T09:05", SEOUL) == at(2025, 1, 6, 0, 5)
    assert parse_input_value("2025-01-06T09:05+00:00", SEOUL) == at(2025, 1, 6, 9, 5)
    assert format_date(at(2025, 1, 6, 9), UTC) == "Mon, Jan 6, 2025"


def test_item_flags_follow_now() -> None:
    schedule = row("1", "Standup", at(2025, 1, 6, 9), at(2025, 1, 6, 9, 15), description="Daily")

    during = build_item(schedule, at(2025, 1, 6, 9, 5), UTC)
    assert during.is_today is True
    assert during.is_past is False
    assert (during.start_label, during.end_label) == ("09:00", "09:15")
    assert during.date_label == "Mon, Jan 6, 2025"

    later = build_item(schedule, at(2025, 1, 6, 9, 20), UTC)
    assert later.is_past is True

    next_day = build_item(schedule, at(2025, 1, 7, 8), UTC)
    assert next_day.is_today is False


def test_item_today_uses_display_timezone() -> None:
    # 16:00 UTC on the 5th is already the 6th in Seoul
    schedule = row("1", "Late", at(2025, 1, 5, 16), at(2025, 1, 5, 17))
    assert build_item(schedule, datetime(2025, 1, 6, 10, 0, tzinfo=SEOUL), SEOUL).is_today is True
    assert build_item(schedule, datetime(2025, 1, 6, 10, 0, tzinfo=SEOUL), UTC).is_today is False


def test_item_delete_prompt_names_title() -> None:
    item = build_item(row("1", "Retro", at(2025, 1, 6, 9), at(2025, 1, 6, 10)), at(2025, 1, 1), UTC)
    assert item.delete_prompt == 'Are you sure you want to delete "Retro"? This action cannot be undone.'
    assert item.description is None
