"""User database queries"""
import logging
from typing import Optional

from taskstreak.db.connection import Database

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, username, password, created_at"


async def get_user(db: Database, user_id: str) -> Optional[dict]:
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE id = %s",
                (user_id,)
            )
            return await cur.fetchone()


async def get_user_by_username(db: Database, username: str) -> Optional[dict]:
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE username = %s",
                (username,)
            )
            return await cur.fetchone()


async def create_user(db: Database, username: str, password: str) -> dict:
    """Insert a user and return the stored row"""
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                INSERT INTO users (username, password)
                VALUES (%s, %s)
                RETURNING {USER_COLUMNS}
                """,
                (username, password)
            )
            row = await cur.fetchone()
            await conn.commit()

    logger.info(f"Created user {row['id']}")
    return row
