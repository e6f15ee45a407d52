"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and an explicitly constructed
``Database`` handle. The handle is owned by whoever creates it (the FastAPI
lifespan, a test fixture) and is passed to repositories; nothing here is
initialised at import time.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from weekplan.core.config import Settings, get_settings
from weekplan.core.logger import setup_logger

logger = setup_logger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class TaskORM(Base):
    """Task ORM model."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(String(10), nullable=False, default="want")
    category = Column(String(100), nullable=True)
    estimated_hours = Column(Float, nullable=True)
    actual_hours = Column(Float, nullable=True)
    status = Column(String(20), default="pending", index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class TaskScheduleORM(Base):
    """Schedule entry ORM model (one task placed on one business day)."""

    __tablename__ = "task_schedules"
    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 1 AND 5", name="ck_task_schedules_business_day"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(String(5), nullable=True)  # HH:MM
    end_time = Column(String(5), nullable=True)  # HH:MM
    scheduled_date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)


# ===========================================
# Database Session Management
# ===========================================


class Database:
    """Async engine plus session factory with explicit init/teardown."""

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.engine: AsyncEngine = create_async_engine(database_url, echo=echo)
        self.session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def init(self) -> None:
        """Create tables if they do not exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database initialized")

    async def dispose(self) -> None:
        """Release pooled connections."""
        await self.engine.dispose()
        logger.info("Database connections disposed")


def create_database(settings: Optional[Settings] = None) -> Database:
    """Build a Database from settings (not initialised yet)."""
    settings = settings or get_settings()
    return Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
