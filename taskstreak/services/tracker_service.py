"""
TrackerService - Task and Progress Business Logic

Composes the task registry, the progress store and the statistics engine.
The HTTP layer only talks to this service.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from taskstreak.exceptions import ValidationError
from taskstreak.models import (
    Task, TaskCreate, is_known_category,
    DailyProgress, DailyProgressCreate,
    ProgressStats, DailySummary, WeeklySummary,
)
from taskstreak.stats import (
    DISTINCT_DAYS,
    calculate_progress_stats,
    summarize_day,
    summarize_week,
)
from taskstreak.store.base import TrackerStore
from taskstreak.utils.datetime_helpers import now_utc, today_utc

logger = logging.getLogger(__name__)


def stamp_completion(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Keep completed_at in line with completed.

    completed=True without an explicit completed_at gets the current UTC
    time; completed=False clears completed_at. Fields without 'completed'
    are returned unchanged.
    """
    fields = dict(fields)
    if "completed" not in fields:
        return fields

    if fields["completed"]:
        if fields.get("completed_at") is None:
            fields["completed_at"] = now_utc()
    else:
        fields["completed_at"] = None
    return fields


class TrackerService:
    """
    Service for tasks, daily progress and statistics.

    Responsibilities:
    - Task CRUD with soft delete
    - Progress upsert/patch, one record per task and date
    - Stats and summaries over the full history
    """

    def __init__(self, store: TrackerStore, streak_mode: str = DISTINCT_DAYS):
        """
        Initialize TrackerService.

        Args:
            store: Storage backend
            streak_mode: 'distinct_days' or 'consecutive'
        """
        self.store = store
        self.streak_mode = streak_mode
        logger.debug(f"TrackerService initialized (streak_mode={streak_mode})")

    # ==========================================
    # Tasks
    # ==========================================

    async def list_tasks(self) -> List[Task]:
        return await self.store.list_tasks()

    async def get_task(self, task_id: str) -> Optional[Task]:
        return await self.store.get_task(task_id)

    async def create_task(self, task: TaskCreate) -> Task:
        if not is_known_category(task.category):
            logger.info(f"Task '{task.title}' uses custom category {task.category!r}")
        return await self.store.create_task(task)

    async def update_task(self, task_id: str, fields: Dict[str, Any]) -> Optional[Task]:
        return await self.store.update_task(task_id, fields)

    async def delete_task(self, task_id: str) -> bool:
        return await self.store.delete_task(task_id)

    # ==========================================
    # Daily progress
    # ==========================================

    async def progress_for_date(self, day: date) -> List[DailyProgress]:
        return await self.store.records_for_date(day)

    async def upsert_progress(self, day: date, fields: Dict[str, Any]) -> DailyProgress:
        """
        Create or update the record for (fields['task_id'], day).

        Args:
            day: Calendar date the completion belongs to
            fields: Progress fields; only these are merged into an existing record

        Raises:
            ValidationError: task_id does not reference a known task, or
                user_id is given and does not reference a known user
        """
        task_id = fields.get("task_id")
        if not task_id or await self.store.get_task(task_id) is None:
            raise ValidationError(
                message=f"Task {task_id} does not exist",
                field="taskId",
                value=task_id,
                operation="upsert_progress"
            )

        user_id = fields.get("user_id")
        if user_id is not None and await self.store.get_user(user_id) is None:
            raise ValidationError(
                message=f"User {user_id} does not exist",
                field="userId",
                value=user_id,
                operation="upsert_progress"
            )

        candidate = DailyProgressCreate.model_validate({**stamp_completion(fields), "date": day})
        progress = await self.store.upsert_progress(candidate)
        logger.info(f"Progress for task {task_id} on {day}: completed={progress.completed}")
        return progress

    async def patch_progress(self, progress_id: str, fields: Dict[str, Any]) -> Optional[DailyProgress]:
        """Merge fields into an existing record; None when the id is unknown"""
        return await self.store.patch_progress(progress_id, stamp_completion(fields))

    # ==========================================
    # Statistics
    # ==========================================

    async def get_stats(self, today: Optional[date] = None) -> ProgressStats:
        records = await self.store.all_records()
        return calculate_progress_stats(
            records,
            streak_mode=self.streak_mode,
            today=today or today_utc()
        )

    async def daily_summary(self, day: date) -> DailySummary:
        records = await self.store.records_for_date(day)
        active_tasks = await self.store.list_tasks()
        return summarize_day(day, records, len(active_tasks))

    async def weekly_summary(self, anchor: date, today: Optional[date] = None) -> WeeklySummary:
        records = await self.store.all_records()
        return summarize_week(anchor, records, today=today or today_utc())
