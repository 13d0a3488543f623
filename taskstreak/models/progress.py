"""Daily progress models"""
from typing import Optional
import datetime as dt
from pydantic import Field, field_validator

from taskstreak.models.base import CamelModel


class DailyProgressCreate(CamelModel):
    """Candidate progress record for upsert, keyed by (task_id, date)"""
    user_id: Optional[str] = None
    task_id: str = Field(..., min_length=1)
    date: dt.date
    completed: bool = False
    completed_at: Optional[dt.datetime] = None
    streak: int = 0  # informational only, never used by the stats engine
    notes: Optional[str] = None


class DailyProgressUpdate(CamelModel):
    """Partial update of an existing progress record"""
    completed: Optional[bool] = None
    completed_at: Optional[dt.datetime] = None
    notes: Optional[str] = None

    @field_validator("completed", mode="before")
    @classmethod
    def reject_null_completed(cls, v):
        if v is None:
            raise ValueError("completed may not be null")
        return v


class DailyProgress(DailyProgressCreate):
    """Stored progress record: one task on one date"""
    id: str
