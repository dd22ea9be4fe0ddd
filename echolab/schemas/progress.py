"""
Progress tracking schemas for EchoLab.
"""

from pydantic import BaseModel, Field


class UserStats(BaseModel):
    total_hours: float = Field(default=0.0, ge=0)
    materials_completed: int = Field(default=0, ge=0)
    streak_days: int = Field(default=0, ge=0)
    today_minutes: int = Field(default=0, ge=0)
