"""
PostgreSQL store

Backs the tracker with the users / tasks / daily_progress tables.
The (task_id, date) uniqueness is enforced by the table constraint and
INSERT ... ON CONFLICT, so concurrent upserts cannot create duplicates.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

import psycopg

from taskstreak.db.connection import Database
from taskstreak.db.queries import progress as progress_queries
from taskstreak.db.queries import tasks as task_queries
from taskstreak.db.queries import users as user_queries
from taskstreak.exceptions import ValidationError, wrap_external_exception
from taskstreak.models import (
    Task, TaskCreate,
    DailyProgress, DailyProgressCreate,
    User, UserCreate,
)
from taskstreak.store.base import TrackerStore
from taskstreak.store.defaults import DEFAULT_TASKS

logger = logging.getLogger(__name__)


class PostgresStore(TrackerStore):
    """Store backed by a psycopg connection pool"""

    def __init__(self, db: Database):
        self.db = db

    async def open(self) -> None:
        try:
            await self.db.init_pool()
            await self.db.init_schema()
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="open_store")

    async def close(self) -> None:
        await self.db.close_pool()

    async def seed_defaults(self) -> None:
        if await task_queries.count_tasks(self.db) > 0:
            logger.debug("Task registry not empty, skipping default seed")
            return

        for task in DEFAULT_TASKS:
            fields = {k: v for k, v in task.items() if k != "id"}
            await task_queries.create_task(self.db, fields, task_id=task["id"])
        logger.info(f"Seeded {len(DEFAULT_TASKS)} default tasks")

    # ==========================================
    # Users
    # ==========================================

    async def get_user(self, user_id: str) -> Optional[User]:
        row = await user_queries.get_user(self.db, user_id)
        return User(**row) if row else None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        row = await user_queries.get_user_by_username(self.db, username)
        return User(**row) if row else None

    async def create_user(self, user: UserCreate) -> User:
        try:
            row = await user_queries.create_user(self.db, user.username, user.password)
        except psycopg.errors.UniqueViolation:
            raise ValidationError(
                message=f"Username {user.username} is already taken",
                field="username",
                value=user.username,
                operation="create_user"
            )
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="create_user", context={"username": user.username})
        return User(**row)

    # ==========================================
    # Tasks
    # ==========================================

    async def list_tasks(self) -> List[Task]:
        rows = await task_queries.list_active_tasks(self.db)
        return [Task(**row) for row in rows]

    async def get_task(self, task_id: str) -> Optional[Task]:
        row = await task_queries.get_task(self.db, task_id)
        return Task(**row) if row else None

    async def create_task(self, task: TaskCreate) -> Task:
        try:
            row = await task_queries.create_task(self.db, task.model_dump())
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="create_task", context={"title": task.title})
        logger.info(f"Created task {row['id']}: {row['title']}")
        return Task(**row)

    async def update_task(self, task_id: str, fields: Dict[str, Any]) -> Optional[Task]:
        try:
            row = await task_queries.update_task(self.db, task_id, fields)
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="update_task", context={"task_id": task_id})
        return Task(**row) if row else None

    async def delete_task(self, task_id: str) -> bool:
        found = await task_queries.deactivate_task(self.db, task_id)
        if found:
            logger.info(f"Soft-deleted task {task_id}")
        return found

    # ==========================================
    # Daily progress
    # ==========================================

    async def records_for_date(self, day: date) -> List[DailyProgress]:
        rows = await progress_queries.get_progress_by_date(self.db, day)
        return [DailyProgress(**row) for row in rows]

    async def upsert_progress(self, progress: DailyProgressCreate) -> DailyProgress:
        try:
            row = await progress_queries.upsert_progress(
                self.db,
                progress.model_dump(),
                merge_fields=progress.model_fields_set
            )
        except psycopg.Error as e:
            raise wrap_external_exception(
                e,
                operation="upsert_progress",
                context={"task_id": progress.task_id, "date": progress.date.isoformat()}
            )
        return DailyProgress(**row)

    async def patch_progress(self, progress_id: str, fields: Dict[str, Any]) -> Optional[DailyProgress]:
        try:
            row = await progress_queries.update_progress(self.db, progress_id, fields)
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="patch_progress", context={"progress_id": progress_id})
        return DailyProgress(**row) if row else None

    async def all_records(self) -> List[DailyProgress]:
        rows = await progress_queries.get_all_progress(self.db)
        return [DailyProgress(**row) for row in rows]
