"""
Task repository interface.

The task store is an external collaborator of the scheduler; only the
operations the scheduler needs (plus create, for seeding) are defined here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from weekplan.models.enums import TaskStatus
from weekplan.models.task import Task, TaskCreate


class ITaskRepository(ABC):
    """Abstract interface for task persistence."""

    @abstractmethod
    async def create(self, task: TaskCreate) -> Task:
        """
        Create a new task.

        Args:
            task: Task creation data

        Returns:
            Created task with generated ID and timestamps
        """
        pass

    @abstractmethod
    async def get(self, task_id: int) -> Optional[Task]:
        """
        Get a task by ID.

        Args:
            task_id: Task ID

        Returns:
            Task if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_many(self, task_ids: list[int]) -> list[Task]:
        """Get the tasks that exist among ``task_ids`` (order not guaranteed)."""
        pass

    @abstractmethod
    async def list(
        self,
        status: Optional[TaskStatus] = None,
        include_completed: bool = True,
    ) -> list[Task]:
        """
        List tasks with optional filters.

        Args:
            status: Filter by status
            include_completed: Include completed tasks when no status filter is given

        Returns:
            List of tasks ordered by creation time
        """
        pass
