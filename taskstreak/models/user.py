"""User models"""
from datetime import datetime
from pydantic import Field

from taskstreak.models.base import CamelModel


class UserCreate(CamelModel):
    username: str = Field(..., min_length=1)
    password: str


class User(UserCreate):
    id: str
    created_at: datetime
