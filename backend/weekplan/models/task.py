"""
Task model definitions.

Tasks are owned by the task store. The scheduler only reads their id,
priority and estimated duration.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from weekplan.models.enums import TaskPriority, TaskStatus


class TaskBase(BaseModel):
    """Base task fields shared across create/read."""

    title: str = Field(..., min_length=1, max_length=500, description="Task title")
    description: Optional[str] = Field(None, max_length=2000, description="Task details")
    priority: TaskPriority = Field(TaskPriority.WANT, description="must / want")
    category: Optional[str] = Field(None, max_length=100, description="Free-form category")
    estimated_hours: Optional[float] = Field(
        None, ge=0, description="Estimated duration in hours (None = use default)"
    )


class TaskCreate(TaskBase):
    """Schema for creating a new task."""

    status: TaskStatus = Field(TaskStatus.PENDING)


class Task(TaskBase):
    """Complete task model with all fields."""

    id: int
    actual_hours: Optional[float] = Field(None, ge=0)
    status: TaskStatus = Field(TaskStatus.PENDING, description="Lifecycle status")
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
