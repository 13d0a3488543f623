"""Task models"""
from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import Field, field_validator

from taskstreak.models.base import CamelModel


class TaskCategory(str, Enum):
    """Known task categories (unknown values are still accepted)"""
    STUDY = "study"
    EXERCISE = "exercise"
    WORK = "work"
    PERSONAL = "personal"
    HEALTH = "health"
    CREATIVITY = "creativity"


def is_known_category(category: str) -> bool:
    return category in {c.value for c in TaskCategory}


class TaskCreate(CamelModel):
    """Fields accepted when creating a task"""
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    emoji: str = Field(..., min_length=1)
    time_slots: int = Field(default=1, ge=1)
    category: str = Field(..., min_length=1)
    color: str = "#3B82F6"
    is_active: bool = True


class TaskUpdate(CamelModel):
    """Partial task update; only fields that were sent are merged"""
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    emoji: Optional[str] = Field(default=None, min_length=1)
    time_slots: Optional[int] = Field(default=None, ge=1)
    category: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("title", "emoji", "time_slots", "category", "color", "is_active", mode="before")
    @classmethod
    def reject_null(cls, v):
        """Only description may be cleared with null"""
        if v is None:
            raise ValueError("Field may not be null")
        return v


class Task(TaskCreate):
    """Stored task definition"""
    id: str
    created_at: datetime
