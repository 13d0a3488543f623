"""Statistics models"""
import datetime as dt

from pydantic import Field

from taskstreak.models.base import CamelModel


class ProgressStats(CamelModel):
    """Aggregate statistics over the whole completion history"""
    current_streak: int = 0
    best_streak: int = 0
    total_completed: int = 0
    weekly_average: int = 0


class DailySummary(CamelModel):
    """Completion state of a single day against the active task list"""
    date: dt.date
    completed: int
    total: int
    remaining: int
    completion_percentage: float


class DayTally(CamelModel):
    date: dt.date
    completed: int
    total: int


class WeeklySummary(CamelModel):
    """Monday-to-Sunday week overview"""
    week_start: dt.date
    week_end: dt.date
    total_days: int = 0
    active_days: int = 0
    perfect_days: int = 0
    total_tasks: int = 0
    completed_tasks: int = 0
    completion_rate: int = 0
    days: list[DayTally] = Field(default_factory=list)
