"""Unit tests for TrackerService"""
import pytest
from datetime import date, datetime, timezone
from unittest.mock import patch

from taskstreak.exceptions import ValidationError
from taskstreak.models import TaskCreate, UserCreate
from taskstreak.services.container import ServiceContainer
from taskstreak.services.tracker_service import TrackerService, stamp_completion
from taskstreak.stats import CONSECUTIVE
from taskstreak.store import MemoryStore


FIXED_NOW = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


# ============================================================================
# Completion Stamping
# ============================================================================

def test_stamp_completion_sets_timestamp():
    with patch("taskstreak.services.tracker_service.now_utc", return_value=FIXED_NOW):
        fields = stamp_completion({"completed": True})

    assert fields["completed_at"] == FIXED_NOW


def test_stamp_completion_keeps_explicit_timestamp():
    explicit = datetime(2024, 1, 14, 22, 0, tzinfo=timezone.utc)

    fields = stamp_completion({"completed": True, "completed_at": explicit})

    assert fields["completed_at"] == explicit


def test_stamp_completion_clears_timestamp():
    fields = stamp_completion({"completed": False, "completed_at": FIXED_NOW})

    assert fields["completed_at"] is None


def test_stamp_completion_without_completed_is_untouched():
    original = {"notes": "tired"}

    fields = stamp_completion(original)

    assert fields == {"notes": "tired"}
    assert fields is not original


# ============================================================================
# Progress
# ============================================================================

async def test_upsert_progress_unknown_task(tracker_service):
    with pytest.raises(ValidationError) as exc_info:
        await tracker_service.upsert_progress(date(2024, 1, 15), {"task_id": "missing", "completed": True})

    assert exc_info.value.field == "taskId"
    assert await tracker_service.store.all_records() == []


async def test_upsert_progress_stamps_and_replaces(tracker_service, study_task):
    task = await tracker_service.create_task(study_task)
    day = date(2024, 1, 15)

    first = await tracker_service.upsert_progress(day, {"task_id": task.id, "completed": True})
    assert first.completed_at is not None

    second = await tracker_service.upsert_progress(day, {"task_id": task.id, "completed": False})

    assert second.id == first.id
    assert second.completed is False
    assert second.completed_at is None
    assert len(await tracker_service.progress_for_date(day)) == 1


async def test_upsert_progress_unknown_user(tracker_service, study_task):
    task = await tracker_service.create_task(study_task)

    with pytest.raises(ValidationError) as exc_info:
        await tracker_service.upsert_progress(
            date(2024, 1, 15), {"task_id": task.id, "user_id": "ghost", "completed": True}
        )

    assert exc_info.value.field == "userId"
    assert await tracker_service.store.all_records() == []


async def test_upsert_progress_known_user(tracker_service, study_task):
    task = await tracker_service.create_task(study_task)
    user = await tracker_service.store.create_user(UserCreate(username="asha", password="secret"))

    progress = await tracker_service.upsert_progress(
        date(2024, 1, 15), {"task_id": task.id, "user_id": user.id, "completed": True}
    )

    assert progress.user_id == user.id


async def test_create_task_then_complete_twice(tracker_service):
    """Test completing the same task twice on one day stores a single completed record"""
    task = await tracker_service.create_task(
        TaskCreate(title="Task A", emoji="📚", time_slots=1, category="study")
    )

    for _ in range(2):
        await tracker_service.upsert_progress(date(2024, 1, 1), {"task_id": task.id, "completed": True})

    records = await tracker_service.progress_for_date(date(2024, 1, 1))
    assert len(records) == 1
    assert records[0].completed is True


async def test_upsert_progress_for_inactive_task_is_allowed(tracker_service, study_task):
    """Test history can still be recorded for a soft-deleted task"""
    task = await tracker_service.create_task(study_task)
    await tracker_service.delete_task(task.id)

    progress = await tracker_service.upsert_progress(date(2024, 1, 15), {"task_id": task.id, "completed": True})

    assert progress.task_id == task.id


async def test_patch_progress_stamps_completion(tracker_service, study_task):
    task = await tracker_service.create_task(study_task)
    record = await tracker_service.upsert_progress(date(2024, 1, 15), {"task_id": task.id})

    with patch("taskstreak.services.tracker_service.now_utc", return_value=FIXED_NOW):
        patched = await tracker_service.patch_progress(record.id, {"completed": True})

    assert patched.completed is True
    assert patched.completed_at == FIXED_NOW


async def test_patch_unknown_progress(tracker_service):
    assert await tracker_service.patch_progress("missing", {"completed": True}) is None


# ============================================================================
# Statistics
# ============================================================================

async def test_stats_after_completing_three_tasks_on_two_days(tracker_service, study_task):
    """Test stats reflect every completion across the history"""
    tasks = [await tracker_service.create_task(study_task) for _ in range(3)]
    for task in tasks:
        await tracker_service.upsert_progress(date(2024, 1, 15), {"task_id": task.id, "completed": True})
    await tracker_service.upsert_progress(date(2024, 1, 20), {"task_id": tasks[0].id, "completed": True})

    stats = await tracker_service.get_stats()

    assert stats.total_completed == 4
    assert stats.current_streak == 2
    assert stats.best_streak == 2
    assert stats.weekly_average == 4


async def test_stats_consecutive_mode(memory_store, study_task):
    service = TrackerService(memory_store, streak_mode=CONSECUTIVE)
    task = await service.create_task(study_task)
    for day in (13, 14, 15):
        await service.upsert_progress(date(2024, 1, day), {"task_id": task.id, "completed": True})

    stats = await service.get_stats(today=date(2024, 1, 16))
    assert stats.current_streak == 3

    stats = await service.get_stats(today=date(2024, 1, 30))
    assert stats.current_streak == 0
    assert stats.best_streak == 3


async def test_daily_summary_uses_active_tasks(tracker_service, study_task):
    tasks = [await tracker_service.create_task(study_task) for _ in range(4)]
    day = date(2024, 1, 15)
    await tracker_service.upsert_progress(day, {"task_id": tasks[0].id, "completed": True})

    summary = await tracker_service.daily_summary(day)

    assert summary.completed == 1
    assert summary.total == 4
    assert summary.remaining == 3
    assert summary.completion_percentage == 25.0


async def test_weekly_summary(tracker_service, study_task):
    task = await tracker_service.create_task(study_task)
    await tracker_service.upsert_progress(date(2024, 1, 15), {"task_id": task.id, "completed": True})

    summary = await tracker_service.weekly_summary(date(2024, 1, 17), today=date(2024, 1, 17))

    assert summary.week_start == date(2024, 1, 15)
    assert summary.total_days == 3
    assert summary.active_days == 1
    assert summary.perfect_days == 1


# ============================================================================
# Service Container
# ============================================================================

def test_container_builds_service_lazily():
    container = ServiceContainer(store=MemoryStore(), streak_mode=CONSECUTIVE)

    service = container.tracker_service

    assert service is container.tracker_service
    assert service.store is container.store
    assert service.streak_mode == CONSECUTIVE


async def test_container_startup_seeds_defaults():
    container = ServiceContainer(store=MemoryStore())

    await container.startup()

    assert len(await container.store.list_tasks()) == 4
    await container.shutdown()


async def test_container_startup_without_seeding():
    container = ServiceContainer(store=MemoryStore(), seed_defaults=False)

    await container.startup()

    assert await container.store.list_tasks() == []
