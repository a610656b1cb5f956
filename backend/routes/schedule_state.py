# routes/schedule_state.py
# Schedule board: the in-memory schedule list and the page's UI state.
# The table is read once on load; afterwards every acknowledged mutation is applied locally.

import logging
import threading
from datetime import datetime, tzinfo
from typing import Any, Dict, List, NamedTuple, Optional

from schemas.schedule_schema import ScheduleCreate, ScheduleOut, ScheduleUpdate
from services.schedule_table import ScheduleTable, StoreError
from routes.schedule_form import ScheduleForm
from routes.schedule_time import now as _now, to_local
from settings import APP_TIMEZONE

logger = logging.getLogger(__name__)

TABS = ("upcoming", "past")
_TIME_FIELDS = ("start_time", "end_time")


class Partition(NamedTuple):
    upcoming: List[ScheduleOut]
    past: List[ScheduleOut]


def _by_start(s: ScheduleOut) -> datetime:
    return s.start_time


class ScheduleBoard:
    """
    Owns the schedule list, the dialog, the active tab and the theme flag.
    Store failures are logged and leave the list untouched.

    :param table: table client
    :type table: ScheduleTable
    :param tz: display timezone
    :type tz: tzinfo
    """

    def __init__(self, table: ScheduleTable, tz: tzinfo = APP_TIMEZONE):
        self.table = table
        self.tz = tz
        self.schedules: List[ScheduleOut] = []
        self.form = ScheduleForm(tz)
        self.active_tab = "upcoming"
        self.dark = True
        self.last_error: Optional[str] = None
        # guards the list and last_error; round trips run outside it
        self._lock = threading.RLock()

    # ---- store round trips ----

    def _failed(self, message: str) -> None:
        with self._lock:
            self.last_error = message

    def _localize(self, payload):
        # naive times are wall clock in the display timezone
        times = {
            k: to_local(getattr(payload, k), self.tz)
            for k in _TIME_FIELDS
            if k in payload.model_fields_set and getattr(payload, k) is not None
        }
        return payload.model_copy(update=times) if times else payload

    def load(self) -> bool:
        try:
            rows = self.table.select_all()
        except StoreError as e:
            logger.error(f"Error fetching schedules: {e}")
            self._failed("Could not load schedules. Please try again.")
            return False
        with self._lock:
            self.schedules = list(rows)
            self.last_error = None
        logger.info("Loaded %d schedules", len(rows))
        return True

    def create(self, payload: ScheduleCreate) -> Optional[ScheduleOut]:
        """
        Inserts a schedule and appends the returned row, keeping start_time order.
        Closes the dialog on success; on failure the dialog stays open.

        :param payload: new schedule values
        :type payload: ScheduleCreate
        :return: created row, None on failure
        :rtype: Optional[ScheduleOut]
        """

        try:
            created = self.table.insert(self._localize(payload))
        except StoreError as e:
            logger.error(f"Error adding schedule: {e}")
            self._failed("Could not add the schedule. Please try again.")
            return None
        with self._lock:
            self.schedules = sorted([*self.schedules, created], key=_by_start)
            self.last_error = None
            self.form.dismiss()
        return created

    def update(self, schedule_id: str, payload: Any) -> bool:
        """
        Updates a schedule by id and merges the sent fields into the local copy.
        The list is not re-sorted.

        :param schedule_id: schedule id
        :type schedule_id: str
        :param payload: fields to change (ScheduleUpdate, ScheduleCreate or a dict)
        :type payload: Any
        :return: True when the store acknowledged the update
        :rtype: bool
        """

        patch = self._localize(self._as_patch(payload))
        try:
            self.table.update(schedule_id, patch)
        except StoreError as e:
            logger.error(f"Error updating schedule: {e}")
            self._failed("Could not update the schedule. Please try again.")
            return False
        changes = patch.model_dump(exclude_unset=True)
        with self._lock:
            self.schedules = [
                ScheduleOut.model_validate({**s.model_dump(), **changes}) if s.id == schedule_id else s
                for s in self.schedules
            ]
            self.last_error = None
            self.form.dismiss()
        return True

    def delete(self, schedule_id: str) -> bool:
        try:
            self.table.delete(schedule_id)
        except StoreError as e:
            logger.error(f"Error deleting schedule: {e}")
            self._failed("Could not delete the schedule. Please try again.")
            return False
        with self._lock:
            self.schedules = [s for s in self.schedules if s.id != schedule_id]
            self.last_error = None
        return True

    @staticmethod
    def _as_patch(payload: Any) -> ScheduleUpdate:
        if isinstance(payload, ScheduleUpdate):
            return payload
        if isinstance(payload, ScheduleCreate):
            return ScheduleUpdate(**payload.model_dump())
        return ScheduleUpdate(**payload)

    # ---- dialog / intents ----

    def submit(self, values: Dict[str, Any]) -> bool:
        """
        Form submit callback. The form validates and clears itself, then the payload
        goes to update (while editing) or create.

        :raises pydantic.ValidationError: a required field is missing
        """

        payload = self.form.submit(values)
        editing = self.form.editing
        if editing is not None:
            return self.update(editing.id, payload)
        return self.create(payload) is not None

    def find(self, schedule_id: str) -> Optional[ScheduleOut]:
        return next((s for s in self.schedules if s.id == schedule_id), None)

    def open_form(self) -> None:
        self.form.show()

    def request_edit(self, schedule_id: str) -> ScheduleOut:
        schedule = self.find(schedule_id)
        if schedule is None:
            raise LookupError(schedule_id)
        logger.debug("Edit requested for %s", schedule_id)
        self.form.show(schedule)
        return schedule

    def close_form(self) -> None:
        self.form.dismiss()

    def select_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"unknown tab: {tab}")
        self.active_tab = tab

    def toggle_theme(self) -> bool:
        self.dark = not self.dark
        return self.dark

    # ---- views ----

    def partition(self, now: Optional[datetime] = None) -> Partition:
        """
        Splits the list at ``now``: upcoming = end_time >= now, past = end_time < now.
        Both keep list order and together hold every schedule exactly once.

        :param now: reference time (naive values are display-timezone wall clock)
        :type now: Optional[datetime]
        :return: (upcoming, past)
        :rtype: Partition
        """

        ref = to_local(now, self.tz) if now is not None else _now(self.tz)
        upcoming: List[ScheduleOut] = []
        past: List[ScheduleOut] = []
        for s in self.schedules:
            (past if s.end_time < ref else upcoming).append(s)
        return Partition(upcoming, past)

    def displayed(self, now: Optional[datetime] = None) -> List[ScheduleOut]:
        parts = self.partition(now)
        return parts.upcoming if self.active_tab == "upcoming" else parts.past
