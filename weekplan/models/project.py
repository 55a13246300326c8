"""
Project model definitions.

Projects group related tasks; the planner itself ignores them.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"
DEFAULT_PROJECT_COLOR = "#06b6d4"


class ProjectBase(BaseModel):
    """Base project fields."""

    name: str = Field(..., min_length=1, max_length=200)
    color: str = Field(DEFAULT_PROJECT_COLOR, pattern=HEX_COLOR_PATTERN, description="Hex color")


class ProjectCreate(ProjectBase):
    """Schema for creating a new project."""

    pass


class ProjectUpdate(BaseModel):
    """Schema for updating an existing project."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)


class Project(ProjectBase):
    """Complete project model with all fields."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    created_at: datetime
    updated_at: datetime


class ProjectWithTaskCount(Project):
    """Project with task statistics."""

    total_tasks: int = 0
    completed_tasks: int = 0
