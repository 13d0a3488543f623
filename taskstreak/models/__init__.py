"""Domain models for taskstreak"""

from taskstreak.models.task import Task, TaskCreate, TaskUpdate, TaskCategory, is_known_category
from taskstreak.models.progress import DailyProgress, DailyProgressCreate, DailyProgressUpdate
from taskstreak.models.user import User, UserCreate
from taskstreak.models.stats import ProgressStats, DailySummary, DayTally, WeeklySummary

__all__ = [
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskCategory",
    "is_known_category",
    "DailyProgress",
    "DailyProgressCreate",
    "DailyProgressUpdate",
    "User",
    "UserCreate",
    "ProgressStats",
    "DailySummary",
    "DayTally",
    "WeeklySummary",
]
