"""Pydantic models (schemas) for the application."""

from weekplan.models.enums import TaskPriority, TaskStatus
from weekplan.models.task import Task, TaskCreate
from weekplan.models.schedule import (
    GeneratedSchedule,
    ScheduleEntry,
    ScheduleEntryCreate,
    ScheduleEntryUpdate,
    ScheduledTask,
    WeeklySchedule,
)

__all__ = [
    # Enums
    "TaskPriority",
    "TaskStatus",
    # Task
    "Task",
    "TaskCreate",
    # Schedule
    "ScheduleEntry",
    "ScheduleEntryCreate",
    "ScheduleEntryUpdate",
    "ScheduledTask",
    "WeeklySchedule",
    "GeneratedSchedule",
]
