"""
In-memory store

Keeps users, tasks and the daily-progress log in process memory.
Nothing is persisted; restart loses everything except the seeded tasks.
"""

import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import uuid4

from taskstreak.exceptions import ValidationError
from taskstreak.models import (
    Task, TaskCreate,
    DailyProgress, DailyProgressCreate,
    User, UserCreate,
)
from taskstreak.store.base import TrackerStore
from taskstreak.store.defaults import DEFAULT_TASKS
from taskstreak.utils.datetime_helpers import now_utc

logger = logging.getLogger(__name__)


class MemoryStore(TrackerStore):
    """In-process store; every mutation runs under one asyncio lock"""

    def __init__(self):
        self._users: List[User] = []
        self._tasks: List[Task] = []
        self._progress: List[DailyProgress] = []
        self._lock = asyncio.Lock()

    async def seed_defaults(self) -> None:
        """Add the default tasks when the registry is empty"""
        if self._tasks:
            logger.debug("Task registry not empty, skipping default seed")
            return

        created_at = now_utc()
        self._tasks = [
            Task(**task, is_active=True, created_at=created_at)
            for task in DEFAULT_TASKS
        ]
        logger.info(f"Seeded {len(self._tasks)} default tasks")

    # ==========================================
    # Users
    # ==========================================

    async def get_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self._users if u.id == user_id), None)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._users if u.username == username), None)

    async def create_user(self, user: UserCreate) -> User:
        async with self._lock:
            if await self.get_user_by_username(user.username) is not None:
                raise ValidationError(
                    message=f"Username {user.username} is already taken",
                    field="username",
                    value=user.username,
                    operation="create_user"
                )
            new_user = User(id=str(uuid4()), created_at=now_utc(), **user.model_dump())
            self._users.append(new_user)
        logger.info(f"Created user {new_user.id}")
        return new_user

    # ==========================================
    # Tasks
    # ==========================================

    async def list_tasks(self) -> List[Task]:
        return [task for task in self._tasks if task.is_active]

    async def get_task(self, task_id: str) -> Optional[Task]:
        return next((t for t in self._tasks if t.id == task_id), None)

    async def create_task(self, task: TaskCreate) -> Task:
        async with self._lock:
            fields = task.model_dump()
            fields["is_active"] = True
            new_task = Task(id=str(uuid4()), created_at=now_utc(), **fields)
            self._tasks.append(new_task)
        logger.info(f"Created task {new_task.id}: {new_task.title}")
        return new_task

    async def update_task(self, task_id: str, fields: Dict[str, Any]) -> Optional[Task]:
        async with self._lock:
            index = self._find_index(self._tasks, task_id)
            if index is None:
                return None

            fields = {k: v for k, v in fields.items() if k not in ("id", "created_at")}
            self._tasks[index] = self._tasks[index].model_copy(update=fields)
            return self._tasks[index]

    async def delete_task(self, task_id: str) -> bool:
        async with self._lock:
            index = self._find_index(self._tasks, task_id)
            if index is None:
                return False

            self._tasks[index] = self._tasks[index].model_copy(update={"is_active": False})
        logger.info(f"Soft-deleted task {task_id}")
        return True

    # ==========================================
    # Daily progress
    # ==========================================

    async def records_for_date(self, day: date) -> List[DailyProgress]:
        return [p for p in self._progress if p.date == day]

    async def upsert_progress(self, progress: DailyProgressCreate) -> DailyProgress:
        async with self._lock:
            for index, existing in enumerate(self._progress):
                if existing.task_id == progress.task_id and existing.date == progress.date:
                    update = progress.model_dump(include=progress.model_fields_set)
                    self._progress[index] = existing.model_copy(update=update)
                    logger.debug(f"Updated progress {existing.id} for task {progress.task_id} on {progress.date}")
                    return self._progress[index]

            new_progress = DailyProgress(id=str(uuid4()), **progress.model_dump())
            self._progress.append(new_progress)

        logger.debug(f"Created progress {new_progress.id} for task {progress.task_id} on {progress.date}")
        return new_progress

    async def patch_progress(self, progress_id: str, fields: Dict[str, Any]) -> Optional[DailyProgress]:
        async with self._lock:
            index = self._find_index(self._progress, progress_id)
            if index is None:
                return None

            fields = {k: v for k, v in fields.items() if k != "id"}
            self._progress[index] = self._progress[index].model_copy(update=fields)
            return self._progress[index]

    async def all_records(self) -> List[DailyProgress]:
        return list(self._progress)

    @staticmethod
    def _find_index(items: list, item_id: str) -> Optional[int]:
        for index, item in enumerate(items):
            if item.id == item_id:
                return index
        return None
