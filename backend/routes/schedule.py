# Schedule board routes. Every button on the page is a form post handled here; the handler
# calls the board and redirects back to the page (post/redirect/get).
import logging
from typing import Literal, Optional

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError

from routes.schedule_item import build_item
from routes.schedule_render import render_page
from routes.schedule_state import ScheduleBoard
from routes.schedule_time import now as _now

logger = logging.getLogger(__name__)
router = APIRouter(tags=["schedules"])


# helpers
def get_board(request: Request) -> ScheduleBoard:
    return request.app.state.board


def _back_to_board() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


def _form_error_message(e: ValidationError) -> str:
    """
    Turns a form validation error into one line naming the fields to fill in.

    :param e: validation error raised by the form
    :type e: ValidationError
    :return: message such as "Please fill in: title, end time"
    :rtype: str
    """

    fields = []
    for err in e.errors():
        name = str(err["loc"][0]).replace("_", " ") if err.get("loc") else "form"
        if name not in fields:
            fields.append(name)
    return "Please fill in: " + ", ".join(fields)


@router.get("/", response_class=HTMLResponse)
def board_page(request: Request, tab: Optional[Literal["upcoming", "past"]] = None):
    board = get_board(request)
    if tab:
        board.select_tab(tab)
    return HTMLResponse(render_page(board, _now(board.tz)))


@router.post("/theme")
def toggle_theme(request: Request):
    get_board(request).toggle_theme()
    return _back_to_board()


@router.post("/schedules/new")
def open_new_schedule(request: Request):
    get_board(request).open_form()
    return _back_to_board()


@router.post("/schedules")
def submit_schedule(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    start_time: str = Form(""),
    end_time: str = Form(""),
):
    """
    Form submit: create, or update while a schedule is being edited.
    A store failure keeps the dialog open and shows the board's notice.
    """

    board = get_board(request)
    values = {"title": title, "description": description, "start_time": start_time, "end_time": end_time}
    try:
        board.submit(values)
    except ValidationError as e:
        html = render_page(board, _now(board.tz), form_error=_form_error_message(e))
        return HTMLResponse(html, status_code=422)
    return _back_to_board()


@router.post("/schedules/close")
def close_schedule_form(request: Request):
    get_board(request).close_form()
    return _back_to_board()


@router.post("/schedules/{schedule_id}/edit")
def edit_schedule(schedule_id: str, request: Request):
    try:
        get_board(request).request_edit(schedule_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return _back_to_board()


@router.get("/schedules/{schedule_id}/delete", response_class=HTMLResponse)
def confirm_delete_schedule(schedule_id: str, request: Request):
    board = get_board(request)
    schedule = board.find(schedule_id)
    if schedule is None:
        raise HTTPException(status_code=404, detail="Schedule not found")
    now = _now(board.tz)
    return HTMLResponse(render_page(board, now, confirm=build_item(schedule, now, board.tz)))


@router.post("/schedules/{schedule_id}/delete")
def delete_schedule(schedule_id: str, request: Request):
    logger.debug("Delete confirmed for %s", schedule_id)
    get_board(request).delete(schedule_id)
    return _back_to_board()
