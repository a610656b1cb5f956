# routes/schedule_render.py
# HTML rendering of the board page (Jinja templates under routes/templates)
from datetime import datetime
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from routes.schedule_item import ScheduleItemView, build_item
from routes.schedule_state import ScheduleBoard

# Jinja configuration
_jinja = Environment(
    autoescape=True,
    loader=FileSystemLoader(Path(__file__).parent / "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_page(
    board: ScheduleBoard,
    now: datetime,
    confirm: Optional[ScheduleItemView] = None,
    form_error: Optional[str] = None,
) -> str:
    """
    Full board page: header, tabs with counts, the active partition and any open dialog.

    :param board: board state
    :type board: ScheduleBoard
    :param now: render time; drives the partition and the per-row flags
    :type now: datetime
    :param confirm: row awaiting delete confirmation
    :type confirm: Optional[ScheduleItemView]
    :param form_error: validation message for the open dialog
    :type form_error: Optional[str]
    :return: HTML document
    :rtype: str
    """

    parts = board.partition(now)
    shown = parts.upcoming if board.active_tab == "upcoming" else parts.past
    template = _jinja.get_template("board.html.jinja")
    return template.render(
        active_tab=board.active_tab,
        confirm=confirm,
        dark=board.dark,
        form=board.form,
        form_error=form_error,
        items=[build_item(s, now, board.tz) for s in shown],
        last_error=board.last_error,
        tabs=[
            ("upcoming", "Upcoming", len(parts.upcoming)),
            ("past", "Past", len(parts.past)),
        ],
    )
