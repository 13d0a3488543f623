"""API routes for taskstreak"""
import logging
from datetime import date, datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from taskstreak.api.middleware import limiter
from taskstreak.api.models import ProgressUpsertRequest, HealthCheckResponse
from taskstreak.config import RATE_LIMIT
from taskstreak.exceptions import RecordNotFoundError, ValidationError
from taskstreak.models import (
    Task, TaskCreate, TaskUpdate,
    DailyProgress, DailyProgressUpdate,
    ProgressStats, DailySummary, WeeklySummary,
)
from taskstreak.services.tracker_service import TrackerService
from taskstreak.utils.datetime_helpers import parse_iso_date

logger = logging.getLogger(__name__)

router = APIRouter()


def get_tracker_service(request: Request) -> TrackerService:
    """Service from the container attached to this application"""
    return request.app.state.container.tracker_service


def parse_date_param(value: str) -> date:
    """Path date in YYYY-MM-DD form, or a 400"""
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(
            message="Invalid date format. Use YYYY-MM-DD",
            field="date",
            value=value
        )


# ==========================================
# Tasks
# ==========================================

@router.get("/api/tasks", response_model=List[Task])
@limiter.limit(RATE_LIMIT)
async def list_tasks(
    request: Request,
    service: TrackerService = Depends(get_tracker_service)
):
    """All active tasks"""
    return await service.list_tasks()


@router.post("/api/tasks", response_model=Task, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMIT)
async def create_task(
    request: Request,
    task: TaskCreate,
    service: TrackerService = Depends(get_tracker_service)
):
    """Create a new task"""
    return await service.create_task(task)


@router.get("/api/tasks/{task_id}", response_model=Task)
@limiter.limit(RATE_LIMIT)
async def get_task(
    request: Request,
    task_id: str,
    service: TrackerService = Depends(get_tracker_service)
):
    """A single task, including soft-deleted ones"""
    task = await service.get_task(task_id)
    if task is None:
        raise RecordNotFoundError(f"Task {task_id} not found", record_type="Task", record_id=task_id)
    return task


@router.patch("/api/tasks/{task_id}", response_model=Task)
@limiter.limit(RATE_LIMIT)
async def update_task(
    request: Request,
    task_id: str,
    update: TaskUpdate,
    service: TrackerService = Depends(get_tracker_service)
):
    """Update the fields that were sent"""
    task = await service.update_task(task_id, update.model_dump(exclude_unset=True))
    if task is None:
        raise RecordNotFoundError(f"Task {task_id} not found", record_type="Task", record_id=task_id)
    return task


@router.delete("/api/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(RATE_LIMIT)
async def delete_task(
    request: Request,
    task_id: str,
    service: TrackerService = Depends(get_tracker_service)
):
    """Soft delete; the task's progress history is kept"""
    if not await service.delete_task(task_id):
        raise RecordNotFoundError(f"Task {task_id} not found", record_type="Task", record_id=task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ==========================================
# Daily progress
# ==========================================

@router.get("/api/progress/{date}", response_model=List[DailyProgress])
@limiter.limit(RATE_LIMIT)
async def get_daily_progress(
    request: Request,
    date: str,
    service: TrackerService = Depends(get_tracker_service)
):
    """Progress records for a specific date"""
    return await service.progress_for_date(parse_date_param(date))


@router.post("/api/progress/{date}", response_model=DailyProgress)
@limiter.limit(RATE_LIMIT)
async def upsert_daily_progress(
    request: Request,
    date: str,
    body: ProgressUpsertRequest,
    service: TrackerService = Depends(get_tracker_service)
):
    """Create or update the progress record for a task on a date"""
    day = parse_date_param(date)
    return await service.upsert_progress(day, body.model_dump(exclude_unset=True))


@router.patch("/api/progress/{progress_id}", response_model=DailyProgress)
@limiter.limit(RATE_LIMIT)
async def patch_progress(
    request: Request,
    progress_id: str,
    update: DailyProgressUpdate,
    service: TrackerService = Depends(get_tracker_service)
):
    """Update a specific progress entry"""
    progress = await service.patch_progress(progress_id, update.model_dump(exclude_unset=True))
    if progress is None:
        raise RecordNotFoundError(
            f"Progress entry {progress_id} not found",
            record_type="Progress entry",
            record_id=progress_id
        )
    return progress


@router.get("/api/progress/{date}/summary", response_model=DailySummary)
@limiter.limit(RATE_LIMIT)
async def get_daily_summary(
    request: Request,
    date: str,
    service: TrackerService = Depends(get_tracker_service)
):
    """Completed vs. active tasks for one day"""
    return await service.daily_summary(parse_date_param(date))


# ==========================================
# Statistics
# ==========================================

@router.get("/api/stats", response_model=ProgressStats)
@limiter.limit(RATE_LIMIT)
async def get_stats(
    request: Request,
    service: TrackerService = Depends(get_tracker_service)
):
    """Streaks, total completions and weekly average"""
    return await service.get_stats()


@router.get("/api/stats/week/{date}", response_model=WeeklySummary)
@limiter.limit(RATE_LIMIT)
async def get_weekly_summary(
    request: Request,
    date: str,
    service: TrackerService = Depends(get_tracker_service)
):
    """Monday-to-Sunday overview of the week containing date"""
    return await service.weekly_summary(parse_date_param(date))


# ==========================================
# Health
# ==========================================

@router.get("/health", response_model=HealthCheckResponse)
async def health_check(request: Request):
    """Liveness check"""
    store = request.app.state.container.store
    return HealthCheckResponse(
        status="healthy",
        storage=type(store).__name__,
        timestamp=datetime.now(timezone.utc)
    )
