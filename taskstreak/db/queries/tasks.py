"""Task database queries"""
import logging
from typing import Any, Dict, List, Optional

from taskstreak.db.connection import Database

logger = logging.getLogger(__name__)

TASK_COLUMNS = "id, title, description, emoji, time_slots, category, color, is_active, created_at"
UPDATABLE_TASK_FIELDS = ("title", "description", "emoji", "time_slots", "category", "color", "is_active")


async def list_active_tasks(db: Database) -> List[dict]:
    """Active tasks, oldest first"""
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                SELECT {TASK_COLUMNS}
                FROM tasks
                WHERE is_active = true
                ORDER BY created_at, id
                """
            )
            return await cur.fetchall()


async def count_tasks(db: Database) -> int:
    """Number of tasks, active or not"""
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute("SELECT COUNT(*) AS count FROM tasks")
            row = await cur.fetchone()
            return row["count"] if row else 0


async def get_task(db: Database, task_id: str) -> Optional[dict]:
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"SELECT {TASK_COLUMNS} FROM tasks WHERE id = %s",
                (task_id,)
            )
            return await cur.fetchone()


async def create_task(db: Database, task: Dict[str, Any], task_id: Optional[str] = None) -> dict:
    """
    Insert a task (always active) and return the stored row

    Args:
        db: Database instance
        task: title, description, emoji, time_slots, category, color
        task_id: Explicit id (seeded tasks); generated when omitted
    """
    columns = ["title", "description", "emoji", "time_slots", "category", "color", "is_active"]
    params = [
        task["title"],
        task.get("description"),
        task["emoji"],
        task.get("time_slots", 1),
        task["category"],
        task.get("color", "#3B82F6"),
        True,
    ]
    if task_id is not None:
        columns.insert(0, "id")
        params.insert(0, task_id)

    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                INSERT INTO tasks ({', '.join(columns)})
                VALUES ({', '.join(['%s'] * len(columns))})
                RETURNING {TASK_COLUMNS}
                """,
                params
            )
            row = await cur.fetchone()
            await conn.commit()

    return row


async def update_task(db: Database, task_id: str, fields: Dict[str, Any]) -> Optional[dict]:
    """
    Update the given task columns

    Returns:
        Updated row, or None if no task has this id
    """
    update_fields = []
    params = []
    for name in UPDATABLE_TASK_FIELDS:
        if name in fields:
            update_fields.append(f"{name} = %s")
            params.append(fields[name])

    if not update_fields:
        return await get_task(db, task_id)

    params.append(task_id)

    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                UPDATE tasks
                SET {', '.join(update_fields)}
                WHERE id = %s
                RETURNING {TASK_COLUMNS}
                """,
                params
            )
            row = await cur.fetchone()
            await conn.commit()

    return row


async def deactivate_task(db: Database, task_id: str) -> bool:
    """Soft delete; True if a task was found"""
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                "UPDATE tasks SET is_active = false WHERE id = %s RETURNING id",
                (task_id,)
            )
            row = await cur.fetchone()
            await conn.commit()

    return row is not None
