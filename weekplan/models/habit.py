"""
Habit models.

Habits are fixed-time recurring commitments placed before any task.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from weekplan.models.project import HEX_COLOR_PATTERN
from weekplan.utils.datetime_utils import parse_clock_time

DEFAULT_HABIT_COLOR = "#8b5cf6"


class HabitBase(BaseModel):
    """Base habit fields."""

    name: str = Field(..., min_length=1, max_length=200)
    start_time: str = Field(..., description="Daily start time (HH:MM)")
    duration_min: int = Field(..., ge=1)
    protected: bool = False
    recurrence_rrule: str = Field("FREQ=DAILY", max_length=500)
    color: str = Field(DEFAULT_HABIT_COLOR, pattern=HEX_COLOR_PATTERN)

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, value: str) -> str:
        parse_clock_time(value)
        return value


class HabitCreate(HabitBase):
    """Schema for creating a habit."""

    pass


class HabitUpdate(BaseModel):
    """Schema for updating a habit."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    start_time: Optional[str] = None
    duration_min: Optional[int] = Field(None, ge=1)
    protected: Optional[bool] = None
    recurrence_rrule: Optional[str] = Field(None, max_length=500)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            parse_clock_time(value)
        return value


class Habit(HabitBase):
    """Habit with metadata."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    created_at: datetime
    updated_at: datetime
