"""Pydantic models for API request/response validation"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

from taskstreak.models.base import CamelModel


class ProgressUpsertRequest(CamelModel):
    """Body of POST /api/progress/{date}; the date comes from the path"""
    task_id: str = Field(..., min_length=1, description="Task identifier")
    user_id: Optional[str] = Field(default=None, description="Owning user, if any")
    completed: bool = Field(default=False, description="Whether the task was done that day")
    completed_at: Optional[datetime] = Field(
        default=None,
        description="Completion time (set automatically when omitted)"
    )
    streak: int = Field(default=0, description="Informational streak counter")
    notes: Optional[str] = None


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    storage: str = Field(..., description="Storage backend in use")
    timestamp: datetime = Field(..., description="Check timestamp")

