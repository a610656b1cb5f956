# services/schedule_service.py
from sqlalchemy.orm import Session
from typing import List
from datetime import timezone

from models.schedule import Schedule
from settings import APP_TIMEZONE
from schemas.schedule_schema import ScheduleCreate, ScheduleUpdate

_TIME_FIELDS = ("start_time", "end_time")


def _to_utc(data: dict) -> dict:
    # naive values are display-timezone wall clock, never host local time
    for k in _TIME_FIELDS:
        v = data.get(k)
        if v is not None:
            if v.tzinfo is None:
                v = v.replace(tzinfo=APP_TIMEZONE)
            data[k] = v.astimezone(timezone.utc)
    return data

def get_list(db: Session) -> List[Schedule]:
    return db.query(Schedule).order_by(Schedule.start_time.asc()).all()

def create(db: Session, payload: ScheduleCreate) -> Schedule:
    ev = Schedule(**_to_utc(payload.model_dump()))
    db.add(ev); db.commit(); db.refresh(ev)
    return ev

def update(db: Session, schedule_id: str, patch: ScheduleUpdate) -> int:
    data = _to_utc(patch.model_dump(exclude_unset=True))
    if not data: return 0
    rows = db.query(Schedule).filter(Schedule.id == schedule_id).update(data, synchronize_session=False)
    db.commit()
    return rows

def delete(db: Session, schedule_id: str) -> int:
    rows = db.query(Schedule).filter(Schedule.id == schedule_id).delete(synchronize_session=False)
    db.commit()
    return rows
