from datetime import datetime, timezone
from typing import List, Optional

import pytest
from sqlalchemy.orm import sessionmaker

from database import init_db, make_engine
from schemas.schedule_schema import ScheduleCreate, ScheduleOut, ScheduleUpdate
from services.schedule_table import SqlScheduleTable, StoreError

UTC = timezone.utc


def at(*args) -> datetime:
    """UTC datetime shorthand: at(2025, 1, 6, 9, 0)."""
    return datetime(*args, tzinfo=UTC)


def row(id: str, title: str, start: datetime, end: datetime, description: Optional[str] = None) -> ScheduleOut:
    return ScheduleOut(id=id, title=title, description=description, start_time=start, end_time=end)


class MemoryTable:
    """In-memory schedules table. Operations named in ``fail`` raise StoreError."""

    def __init__(self, rows: Optional[List[ScheduleOut]] = None):
        self.rows: List[ScheduleOut] = list(rows or [])
        self.fail: set = set()
        self.calls: List[tuple] = []
        self._next = 100

    def _check(self, op: str, *args) -> None:
        self.calls.append((op, *args))
        if op in self.fail:
            raise StoreError(f"{op} unavailable")

    def select_all(self) -> List[ScheduleOut]:
        self._check("select")
        return sorted(self.rows, key=lambda s: s.start_time)

    def insert(self, payload: ScheduleCreate) -> ScheduleOut:
        self._check("insert", payload)
        self._next += 1
        created = ScheduleOut(id=str(self._next), **payload.model_dump())
        self.rows.append(created)
        return created

    def update(self, schedule_id: str, patch: ScheduleUpdate) -> None:
        self._check("update", schedule_id, patch)
        changes = patch.model_dump(exclude_unset=True)
        self.rows = [s.model_copy(update=changes) if s.id == schedule_id else s for s in self.rows]

    def delete(self, schedule_id: str) -> None:
        self._check("delete", schedule_id)
        self.rows = [s for s in self.rows if s.id != schedule_id]


@pytest.fixture
def memory_table() -> MemoryTable:
    return MemoryTable()


@pytest.fixture
def sql_table():
    engine = make_engine("sqlite://")
    init_db(engine)
    yield SqlScheduleTable(sessionmaker(bind=engine, autocommit=False, autoflush=False))
    engine.dispose()
