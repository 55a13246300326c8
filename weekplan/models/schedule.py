"""
Schedule models for planning outputs.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from weekplan.models.enums import BlockStatus, BlockType


class ScheduleBlockCreate(BaseModel):
    """A placed interval produced by a planning run."""

    block_type: BlockType
    ref_id: Optional[UUID] = None
    title: str
    start_ts: datetime
    end_ts: datetime
    status: BlockStatus = BlockStatus.SCHEDULED
    explanation: Optional[str] = None

    @property
    def duration_minutes(self) -> int:
        return int((self.end_ts - self.start_ts).total_seconds() // 60)


class ScheduleBlock(ScheduleBlockCreate):
    """Stored schedule block."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    created_at: datetime
    updated_at: datetime


class ScheduleBlockUpdate(BaseModel):
    """Status changes on a placed block (completion, cancellation)."""

    status: Optional[BlockStatus] = None
    explanation: Optional[str] = Field(None, max_length=1000)


class PlanningRunResult(BaseModel):
    """Summary of one planning run."""

    blocks_created: int
    week_start: date
    scheduled_task_ids: list[UUID] = Field(default_factory=list)
    unscheduled_task_ids: list[UUID] = Field(default_factory=list)
    skipped_task_ids: list[UUID] = Field(default_factory=list)


class WeeklyStats(BaseModel):
    """Aggregate statistics over one week of blocks and the task backlog."""

    week_start: date
    week_end: date
    total_blocks: int = 0
    blocks_by_status: dict[str, int] = Field(default_factory=dict)
    blocks_by_type: dict[str, int] = Field(default_factory=dict)
    completed_focus_hours: float = 0.0
    habit_blocks: int = 0
    habit_completion_rate: int = Field(0, ge=0, le=100, description="Percent of habit blocks completed")
    completed_by_time_of_day: dict[str, int] = Field(default_factory=dict)
    tasks_by_status: dict[str, int] = Field(default_factory=dict)
    total_habits: int = 0
