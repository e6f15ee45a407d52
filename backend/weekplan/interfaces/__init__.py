"""Abstract interfaces for infrastructure abstraction."""

from weekplan.interfaces.schedule_repository import IScheduleRepository
from weekplan.interfaces.task_repository import ITaskRepository

__all__ = [
    "IScheduleRepository",
    "ITaskRepository",
]
