# routes/schedule_form.py
# Create/edit dialog state. The board decides when it is open and what to do with a submit.
from datetime import tzinfo
from typing import Any, Dict, Optional

from schemas.schedule_schema import ScheduleCreate, ScheduleFormData, ScheduleOut
from routes.schedule_time import parse_input_value, to_input_value
from settings import APP_TIMEZONE


def _empty_fields() -> Dict[str, str]:
    return {"title": "", "description": "", "start_time": "", "end_time": ""}


class ScheduleForm:
    """
    Fields of the schedule dialog plus the schedule being edited (None while creating).
    """

    def __init__(self, tz: tzinfo = APP_TIMEZONE):
        self.tz = tz
        self.open = False
        self.editing: Optional[ScheduleOut] = None
        self.fields: Dict[str, str] = _empty_fields()

    @property
    def is_editing(self) -> bool:
        return self.editing is not None

    def show(self, editing: Optional[ScheduleOut] = None) -> None:
        """
        Opens the dialog. With ``editing`` the fields take that schedule's values,
        times reformatted for ``datetime-local`` inputs; otherwise they start empty.

        :param editing: schedule to edit, None for a new one
        :type editing: Optional[ScheduleOut]
        """

        self.editing = editing
        if editing:
            self.fields = {
                "title": editing.title,
                "description": editing.description or "",
                "start_time": to_input_value(editing.start_time, self.tz),
                "end_time": to_input_value(editing.end_time, self.tz),
            }
        else:
            self.fields = _empty_fields()
        self.open = True

    def submit(self, values: Dict[str, Any]) -> ScheduleCreate:
        """
        Validates the posted values and turns them into a payload (no id), then
        clears the fields. On a validation error the fields keep the posted values.

        :param values: raw form values (title, description, start_time, end_time)
        :type values: Dict[str, Any]
        :return: payload for create or update
        :rtype: ScheduleCreate
        :raises pydantic.ValidationError: a required field is missing or empty
        """

        self.fields = {k: (values.get(k) or "") for k in _empty_fields()}
        data = ScheduleFormData(**self.fields)
        payload = ScheduleCreate(
            title=data.title,
            description=data.description or None,
            start_time=parse_input_value(data.start_time, self.tz),
            end_time=parse_input_value(data.end_time, self.tz),
        )
        self.fields = _empty_fields()
        return payload

    def dismiss(self) -> None:
        self.editing = None
        self.fields = _empty_fields()
        self.open = False
