"""
Task models.

A task is one entity even when the planner represents it by several blocks.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from weekplan.models.enums import EnergyLevel, TaskPriority, TaskStatus, TimeWindow


class TaskBase(BaseModel):
    """Base task fields shared by create and read models."""

    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)
    priority: TaskPriority = TaskPriority.P3
    due_ts: Optional[datetime] = Field(None, description="Due timestamp")
    est_min: int = Field(60, description="Estimated total duration in minutes")
    min_chunk_min: int = Field(15, description="Smallest useful chunk in minutes")
    energy: EnergyLevel = EnergyLevel.MEDIUM
    preferred_window: TimeWindow = TimeWindow.ANY
    hard_deadline: bool = False
    project_id: Optional[UUID] = None


class TaskCreate(TaskBase):
    """Schema for creating a new task."""

    est_min: int = Field(60, ge=1)
    min_chunk_min: int = Field(15, ge=1)
    status: TaskStatus = TaskStatus.BACKLOG

    @model_validator(mode="after")
    def validate_chunking(self):
        """Reject a minimum chunk larger than the whole task."""
        if self.min_chunk_min > self.est_min:
            raise ValueError("min_chunk_min must not exceed est_min")
        return self


class TaskUpdate(BaseModel):
    """Schema for updating an existing task."""

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)
    priority: Optional[TaskPriority] = None
    due_ts: Optional[datetime] = None
    est_min: Optional[int] = Field(None, ge=1)
    min_chunk_min: Optional[int] = Field(None, ge=1)
    energy: Optional[EnergyLevel] = None
    preferred_window: Optional[TimeWindow] = None
    hard_deadline: Optional[bool] = None
    project_id: Optional[UUID] = None
    status: Optional[TaskStatus] = None


class Task(TaskBase):
    """Complete task model with all fields."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    status: TaskStatus = TaskStatus.BACKLOG
    created_at: datetime
    updated_at: datetime

    @property
    def is_plannable(self) -> bool:
        """Whether the duration fields allow any placement at all."""
        return self.est_min > 0 and 0 < self.min_chunk_min <= self.est_min
