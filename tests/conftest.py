"""Global test fixtures and utilities for taskstreak tests"""
import pytest
import httpx
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from taskstreak.api.middleware import limiter
from taskstreak.api.server import create_api_application
from taskstreak.models import DailyProgress, TaskCreate
from taskstreak.services.container import ServiceContainer
from taskstreak.services.tracker_service import TrackerService
from taskstreak.store.memory import MemoryStore


# ============================================================================
# Record Factories
# ============================================================================

@pytest.fixture
def progress_factory():
    """Factory for DailyProgress records"""
    def _create(day, task_id="task-1", completed=True, progress_id=None, **kwargs):
        if isinstance(day, str):
            day = date.fromisoformat(day)
        return DailyProgress(
            id=progress_id or str(uuid4()),
            task_id=task_id,
            date=day,
            completed=completed,
            completed_at=datetime(day.year, day.month, day.day, 20, 0, tzinfo=timezone.utc) if completed else None,
            **kwargs
        )

    return _create


@pytest.fixture
def study_task():
    """Standard task creation payload"""
    return TaskCreate(
        title="Morning Study",
        description="Two pomodoros before work",
        emoji="📚",
        time_slots=1,
        category="study",
    )


# ============================================================================
# Store & Service Fixtures
# ============================================================================

@pytest.fixture
def memory_store():
    """Empty in-memory store"""
    return MemoryStore()


@pytest.fixture
async def seeded_store():
    """In-memory store with the default tasks"""
    store = MemoryStore()
    await store.seed_defaults()
    return store


@pytest.fixture
def tracker_service(memory_store):
    """TrackerService over an empty in-memory store"""
    return TrackerService(memory_store)


@pytest.fixture
def mock_db_connection():
    """
    Mock Database whose connection() yields a connection with a mock cursor.

    Returns (db, cursor, conn) so tests can set fetchone/fetchall results
    and inspect the executed SQL.
    """
    cursor = AsyncMock()
    cursor.fetchone = AsyncMock(return_value=None)
    cursor.fetchall = AsyncMock(return_value=[])
    cursor.execute = AsyncMock()

    conn = MagicMock()
    conn.cursor.return_value.__aenter__.return_value = cursor
    conn.commit = AsyncMock()
    conn.execute = AsyncMock()

    db = MagicMock()
    db.connection.return_value.__aenter__.return_value = conn
    return db, cursor, conn


# ============================================================================
# HTTP & API Fixtures
# ============================================================================

@pytest.fixture
def container(seeded_store):
    """Service container over a seeded in-memory store"""
    return ServiceContainer(store=seeded_store, seed_defaults=False)


@pytest.fixture
def app(container, monkeypatch):
    """FastAPI app with rate limiting disabled"""
    monkeypatch.setattr(limiter, "enabled", False)
    return create_api_application(container)


@pytest.fixture
async def api_client(app):
    """Async HTTP client talking to the app in-process"""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
