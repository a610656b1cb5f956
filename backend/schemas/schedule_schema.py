# schemas/schedule_schema.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime, timezone


def _assume_utc(v: datetime) -> datetime:
    # SQLite hands back naive values; everything stored is UTC
    return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v


class ScheduleCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime


class ScheduleUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None


class ScheduleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        # PostgREST tables may use integer or uuid keys
        return str(v) if v is not None else v

    @field_validator("start_time", "end_time")
    @classmethod
    def _aware(cls, v: datetime) -> datetime:
        return _assume_utc(v)


class ScheduleFormData(BaseModel):
    """
    Raw values of the schedule dialog, as posted by the browser.
    Times are ``datetime-local`` strings (YYYY-MM-DDTHH:MM) in the display timezone.
    """

    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    start_time: str = Field(min_length=1)
    end_time: str = Field(min_length=1)

    @field_validator("start_time", "end_time")
    @classmethod
    def _local_datetime(cls, v: str) -> str:
        datetime.fromisoformat(v)
        return v
