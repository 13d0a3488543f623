"""Storage interface shared by the memory and postgres backends"""
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, List, Optional

from taskstreak.models import (
    Task, TaskCreate,
    DailyProgress, DailyProgressCreate,
    User, UserCreate,
)


class TrackerStore(ABC):
    """
    Task registry, progress record store and user registry.

    Lookups by id return None (or False for delete) when nothing matches;
    missing records are never an exception at this layer.
    """

    async def open(self) -> None:
        """Acquire resources (connection pool, schema). No-op by default."""

    async def close(self) -> None:
        """Release resources. No-op by default."""

    async def seed_defaults(self) -> None:
        """Insert the default tasks when the task registry is empty"""

    # Users

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def create_user(self, user: UserCreate) -> User:
        """Raises ValidationError when the username is already taken"""

    # Tasks

    @abstractmethod
    async def list_tasks(self) -> List[Task]:
        """Active tasks in insertion order"""

    @abstractmethod
    async def get_task(self, task_id: str) -> Optional[Task]:
        """Any task, active or not"""

    @abstractmethod
    async def create_task(self, task: TaskCreate) -> Task: ...

    @abstractmethod
    async def update_task(self, task_id: str, fields: Dict[str, Any]) -> Optional[Task]:
        """Shallow-merge fields into the task"""

    @abstractmethod
    async def delete_task(self, task_id: str) -> bool:
        """Soft delete: flip is_active, keep the task and its history"""

    # Daily progress

    @abstractmethod
    async def records_for_date(self, day: date) -> List[DailyProgress]: ...

    @abstractmethod
    async def upsert_progress(self, progress: DailyProgressCreate) -> DailyProgress:
        """
        Create or update the single record for (task_id, date).

        Only the fields explicitly set on progress are merged into an
        existing record.
        """

    @abstractmethod
    async def patch_progress(self, progress_id: str, fields: Dict[str, Any]) -> Optional[DailyProgress]: ...

    @abstractmethod
    async def all_records(self) -> List[DailyProgress]:
        """Full history, input to the stats engine"""
