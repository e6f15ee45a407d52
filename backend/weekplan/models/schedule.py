"""
Schedule models for weekly task placement.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel, Field

from weekplan.models.enums import TaskPriority, TaskStatus
from weekplan.models.task import Task

DAYS_OF_WEEK = {
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
}

DEFAULT_DAILY_CAPACITY_HOURS = 8.0
DEFAULT_DAY_START = time(10, 0)
DEFAULT_ALLOCATION_HOURS = 2.0
DEFAULT_MOVE_HOURS = 1.0
DEFAULT_MOVE_TIME = time(10, 0)


class ScheduleEntryBase(BaseModel):
    """Placement of one task on one business day."""

    task_id: int
    day_of_week: int = Field(..., ge=1, le=5, description="1=Monday ... 5=Friday")
    start_time: Optional[time] = Field(None, description="None = date-only placeholder")
    end_time: Optional[time] = None
    scheduled_date: date


class ScheduleEntryCreate(ScheduleEntryBase):
    """Schema for inserting a schedule entry."""

    pass


class ScheduleEntryUpdate(BaseModel):
    """Schema for patching a single schedule entry."""

    day_of_week: Optional[int] = Field(None, ge=1, le=5)
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    scheduled_date: Optional[date] = None


class ScheduleEntry(ScheduleEntryBase):
    """Persisted schedule entry."""

    id: int
    created_at: datetime

    class Config:
        from_attributes = True


class ScheduledTask(ScheduleEntry):
    """Schedule entry joined with its task, as shown in the weekly view."""

    title: str
    description: Optional[str] = None
    priority: TaskPriority
    category: Optional[str] = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    status: TaskStatus


class WeeklySchedule(BaseModel):
    """Derived view: business date -> entries ordered by start time."""

    start_date: date
    end_date: date
    days: dict[date, list[ScheduledTask]] = Field(default_factory=dict)


class GeneratedSchedule(BaseModel):
    """Result of allocating and committing one week."""

    start_date: date
    end_date: date
    allocations: dict[date, list[Task]]
    entries: list[ScheduleEntry] = Field(default_factory=list)


# ===========================================
# Request / response payloads
# ===========================================


class GenerateScheduleRequest(BaseModel):
    """Generate the week containing reference_date (today when omitted)."""

    task_ids: Optional[list[int]] = Field(
        None, description="Tasks to schedule (None = every task not yet completed)"
    )
    reference_date: Optional[date] = None


class MoveTaskRequest(BaseModel):
    """Move a task to a new date/time. Strings are validated by the service."""

    task_id: int
    target_date: str = Field(..., description="YYYY-MM-DD")
    target_time: Optional[str] = Field(None, description="HH:MM (default 10:00)")


class MoveTaskResponse(BaseModel):
    message: str
    entry: ScheduleEntry


class ScheduleEntryEditRequest(BaseModel):
    """Partial edit of one schedule entry."""

    start_time: Optional[str] = Field(None, description="HH:MM")
    end_time: Optional[str] = Field(None, description="HH:MM")
    scheduled_date: Optional[str] = Field(None, description="YYYY-MM-DD")
