"""
Calendar event models.

Events come from outside (manual entry or calendar sync) and are never
moved by the planner.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CalendarEventBase(BaseModel):
    """Base calendar event fields."""

    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)
    start_ts: datetime
    end_ts: datetime
    is_busy: bool = True
    source: str = Field("manual", min_length=1, max_length=50)
    external_id: Optional[str] = Field(None, max_length=255)

    @model_validator(mode="after")
    def validate_range(self):
        if self.end_ts <= self.start_ts:
            raise ValueError("end_ts must be after start_ts")
        return self


class CalendarEventCreate(CalendarEventBase):
    """Schema for creating an event."""

    pass


class CalendarEventUpdate(BaseModel):
    """Schema for updating an event."""

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)
    start_ts: Optional[datetime] = None
    end_ts: Optional[datetime] = None
    is_busy: Optional[bool] = None


class CalendarEvent(CalendarEventBase):
    """Calendar event with metadata."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    created_at: datetime
    updated_at: datetime


class CalendarSyncResult(BaseModel):
    """Outcome of replacing the events of one source."""

    source: str
    removed: int
    created: int
