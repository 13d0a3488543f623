"""Daily progress database queries"""
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from taskstreak.db.connection import Database

logger = logging.getLogger(__name__)

PROGRESS_COLUMNS = "id, user_id, task_id, date, completed, completed_at, streak, notes"
INSERT_COLUMNS = ("user_id", "task_id", "date", "completed", "completed_at", "streak", "notes")
MERGEABLE_FIELDS = ("user_id", "completed", "completed_at", "streak", "notes")


async def get_progress_by_date(db: Database, day: date) -> List[dict]:
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                SELECT {PROGRESS_COLUMNS}
                FROM daily_progress
                WHERE date = %s
                ORDER BY created_at, id
                """,
                (day,)
            )
            return await cur.fetchall()


async def get_all_progress(db: Database) -> List[dict]:
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"SELECT {PROGRESS_COLUMNS} FROM daily_progress ORDER BY date, created_at, id"
            )
            return await cur.fetchall()


async def upsert_progress(db: Database, progress: Dict[str, Any], merge_fields: Iterable[str]) -> dict:
    """
    Insert a progress row, or merge into the existing row for (task_id, date)

    Args:
        db: Database instance
        progress: Full candidate row (all INSERT_COLUMNS)
        merge_fields: Columns to overwrite when the row already exists

    Returns:
        The stored row
    """
    merge = [name for name in MERGEABLE_FIELDS if name in set(merge_fields)]
    # ON CONFLICT needs at least one assignment to return the existing row
    assignments = [f"{name} = EXCLUDED.{name}" for name in merge] or ["task_id = EXCLUDED.task_id"]

    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                INSERT INTO daily_progress ({', '.join(INSERT_COLUMNS)})
                VALUES ({', '.join(['%s'] * len(INSERT_COLUMNS))})
                ON CONFLICT (task_id, date) DO UPDATE SET
                    {', '.join(assignments)}
                RETURNING {PROGRESS_COLUMNS}
                """,
                [progress.get(name) for name in INSERT_COLUMNS]
            )
            row = await cur.fetchone()
            await conn.commit()

    logger.debug(f"Upserted progress {row['id']} for task {row['task_id']} on {row['date']}")
    return row


async def update_progress(db: Database, progress_id: str, fields: Dict[str, Any]) -> Optional[dict]:
    """
    Update the given progress columns

    Returns:
        Updated row, or None if no record has this id
    """
    update_fields = []
    params = []
    for name in MERGEABLE_FIELDS:
        if name in fields:
            update_fields.append(f"{name} = %s")
            params.append(fields[name])

    if not update_fields:
        async with db.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    f"SELECT {PROGRESS_COLUMNS} FROM daily_progress WHERE id = %s",
                    (progress_id,)
                )
                return await cur.fetchone()

    params.append(progress_id)

    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                UPDATE daily_progress
                SET {', '.join(update_fields)}
                WHERE id = %s
                RETURNING {PROGRESS_COLUMNS}
                """,
                params
            )
            row = await cur.fetchone()
            await conn.commit()

    return row
