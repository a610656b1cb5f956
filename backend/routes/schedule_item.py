# routes/schedule_item.py
# Per-row display values. Built on every render so the flags follow the clock.
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional

from schemas.schedule_schema import ScheduleOut
from routes.schedule_time import format_date, format_time, to_local
from settings import APP_TIMEZONE


@dataclass(frozen=True)
class ScheduleItemView:
    id: str
    title: str
    description: Optional[str]
    start_label: str
    end_label: str
    date_label: str
    is_today: bool
    is_past: bool

    @property
    def delete_prompt(self) -> str:
        return f'Are you sure you want to delete "{self.title}"? This action cannot be undone.'


def build_item(schedule: ScheduleOut, now: datetime, tz: tzinfo = APP_TIMEZONE) -> ScheduleItemView:
    """
    Computes the display values of one schedule at ``now``.

    - is_today: start date equals today's date (display timezone)
    - is_past: end time is before ``now``

    :param schedule: schedule row
    :type schedule: ScheduleOut
    :param now: reference time
    :type now: datetime
    :param tz: display timezone
    :type tz: tzinfo
    :return: view of the row
    :rtype: ScheduleItemView
    """

    now = to_local(now, tz)
    return ScheduleItemView(
        id=schedule.id,
        title=schedule.title,
        description=schedule.description or None,
        start_label=format_time(schedule.start_time, tz),
        end_label=format_time(schedule.end_time, tz),
        date_label=format_date(schedule.start_time, tz),
        is_today=to_local(schedule.start_time, tz).date() == now.date(),
        is_past=schedule.end_time < now,
    )
