"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
"""

from functools import lru_cache
from uuid import uuid4

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from weekplan.core.config import get_settings
from weekplan.utils.datetime_utils import now_utc


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class ProjectORM(Base):
    """Project ORM model."""

    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    color = Column(String(7), default="#06b6d4")
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class TaskORM(Base):
    """Task ORM model."""

    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(String(2), default="p3")
    due_ts = Column(DateTime(timezone=True), nullable=True)
    est_min = Column(Integer, nullable=False, default=60)
    min_chunk_min = Column(Integer, nullable=False, default=15)
    energy = Column(String(10), default="medium")
    preferred_window = Column(String(10), default="any")
    hard_deadline = Column(Boolean, default=False)
    project_id = Column(String(36), nullable=True, index=True)
    status = Column(String(20), default="backlog", index=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, index=True)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class HabitORM(Base):
    """Habit ORM model."""

    __tablename__ = "habits"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    start_time = Column(String(5), nullable=False)  # HH:MM
    duration_min = Column(Integer, nullable=False)
    protected = Column(Boolean, default=False)
    recurrence_rrule = Column(String(500), default="FREQ=DAILY")
    color = Column(String(7), default="#8b5cf6")
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class CalendarEventORM(Base):
    """Calendar event ORM model."""

    __tablename__ = "calendar_events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    external_id = Column(String(255), nullable=True)
    source = Column(String(50), default="manual", index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    start_ts = Column(DateTime(timezone=True), nullable=False, index=True)
    end_ts = Column(DateTime(timezone=True), nullable=False)
    is_busy = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class ProfileORM(Base):
    """Per-user planning preferences."""

    __tablename__ = "profiles"

    user_id = Column(String(255), primary_key=True)
    timezone = Column(String(64), default="UTC")
    working_hours_json = Column(JSON, nullable=False)
    focus_length_min = Column(Integer, default=90)
    buffer_min = Column(Integer, default=5)
    onboarding_completed = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class ScheduleBlockORM(Base):
    """Schedule block ORM model."""

    __tablename__ = "schedule_blocks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    block_type = Column(String(10), nullable=False)
    ref_id = Column(String(36), nullable=True, index=True)
    title = Column(String(500), nullable=False)
    start_ts = Column(DateTime(timezone=True), nullable=False, index=True)
    end_ts = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), default="scheduled")
    explanation = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


# ===========================================
# Database Session Management
# ===========================================


@lru_cache()
def get_engine() -> AsyncEngine:
    """Get async engine instance."""
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def get_session_factory():
    """Get async session factory."""
    engine = get_engine()
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine | None = None):
    """Initialize database tables."""
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

