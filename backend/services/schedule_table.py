# services/schedule_table.py
# Table clients behind the schedule board.
# - SqlScheduleTable: SQLAlchemy database (local development, tests)
# - RestScheduleTable: hosted Supabase/PostgREST table (services/schedule_remote.py)
import logging
from typing import List, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from schemas.schedule_schema import ScheduleCreate, ScheduleOut, ScheduleUpdate
from services import schedule_service

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A round trip to the schedules table failed (network, service or database error)."""


class ScheduleTable(Protocol):
    def select_all(self) -> List[ScheduleOut]: ...

    def insert(self, payload: ScheduleCreate) -> ScheduleOut: ...

    def update(self, schedule_id: str, patch: ScheduleUpdate) -> None: ...

    def delete(self, schedule_id: str) -> None: ...


class SqlScheduleTable:
    """
    ``schedules`` table in a SQLAlchemy database. One session per call.

    :param session_factory: sessionmaker bound to the target engine
    :type session_factory: sessionmaker
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def _run(self, op: str, fn):
        db = self._session_factory()
        try:
            return fn(db)
        except SQLAlchemyError as e:
            db.rollback()
            raise StoreError(f"{op} failed: {e}") from e
        finally:
            db.close()

    def select_all(self) -> List[ScheduleOut]:
        return self._run(
            "select",
            lambda db: [ScheduleOut.model_validate(s) for s in schedule_service.get_list(db)],
        )

    def insert(self, payload: ScheduleCreate) -> ScheduleOut:
        return self._run(
            "insert",
            lambda db: ScheduleOut.model_validate(schedule_service.create(db, payload)),
        )

    def update(self, schedule_id: str, patch: ScheduleUpdate) -> None:
        rows = self._run("update", lambda db: schedule_service.update(db, schedule_id, patch))
        logger.debug("SQL update id=%s rows=%s", schedule_id, rows)

    def delete(self, schedule_id: str) -> None:
        rows = self._run("delete", lambda db: schedule_service.delete(db, schedule_id))
        logger.debug("SQL delete id=%s rows=%s", schedule_id, rows)


def build_table() -> ScheduleTable:
    """
    Picks the table client from settings: the REST table when ``SUPABASE_URL`` is set,
    otherwise the SQL table on ``DATABASE_URL`` (tables are created on first use).

    :return: table client
    :rtype: ScheduleTable
    """

    from settings import SUPABASE_URL, SUPABASE_KEY, SCHEDULES_TABLE, STORE_TIMEOUT

    if SUPABASE_URL:
        from services.schedule_remote import RestScheduleTable

        logger.info("[store] using REST table %s at %s", SCHEDULES_TABLE, SUPABASE_URL)
        return RestScheduleTable(SUPABASE_URL, SUPABASE_KEY, SCHEDULES_TABLE, timeout=STORE_TIMEOUT)

    from database import SessionLocal, engine, init_db

    init_db(engine)
    logger.info("[store] using SQL table at %s", engine.url.render_as_string(hide_password=True))
    return SqlScheduleTable(SessionLocal)
