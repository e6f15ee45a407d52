"""
Schedule repository interface.

Defines the persistence contract for schedule entries. Whole-week replace
and single-row moves are composed from these primitives inside
``run_atomically``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Awaitable, Callable, Optional, TypeVar

from weekplan.models.schedule import (
    ScheduleEntry,
    ScheduleEntryCreate,
    ScheduleEntryUpdate,
    ScheduledTask,
)

T = TypeVar("T")


class IScheduleRepository(ABC):
    """Abstract interface for schedule entry persistence."""

    @abstractmethod
    async def entries_for_date(self, target_date: date) -> list[ScheduleEntry]:
        """Get entries on one date, ordered by start time."""
        pass

    @abstractmethod
    async def entries_for_date_range(
        self,
        start_date: date,
        end_date: date,
    ) -> list[ScheduleEntry]:
        """Get entries with start_date <= scheduled_date <= end_date."""
        pass

    @abstractmethod
    async def scheduled_tasks_for_date(self, target_date: date) -> list[ScheduledTask]:
        """Get entries on one date joined with their tasks, ordered by start time."""
        pass

    @abstractmethod
    async def scheduled_tasks_for_date_range(
        self,
        start_date: date,
        end_date: date,
    ) -> list[ScheduledTask]:
        """Get joined entries for a date range, ordered by date then start time."""
        pass

    @abstractmethod
    async def get_entry(self, entry_id: int) -> Optional[ScheduleEntry]:
        pass

    @abstractmethod
    async def delete_entries_for_date_range(self, start_date: date, end_date: date) -> int:
        """Delete every entry in the inclusive range. Returns the number deleted."""
        pass

    @abstractmethod
    async def delete_entries_for_task(self, task_id: int) -> int:
        """Delete every entry of a task. Returns the number deleted."""
        pass

    @abstractmethod
    async def insert_entry(self, entry: ScheduleEntryCreate) -> ScheduleEntry:
        pass

    @abstractmethod
    async def update_entry(
        self,
        entry_id: int,
        update: ScheduleEntryUpdate,
    ) -> Optional[ScheduleEntry]:
        """Patch the non-None fields of one entry. Returns None if absent."""
        pass

    @abstractmethod
    async def run_atomically(
        self,
        fn: Callable[["IScheduleRepository"], Awaitable[T]],
    ) -> T:
        """
        Run ``fn`` inside one transaction.

        ``fn`` receives a repository bound to the transaction and must use it
        for every read and write. The transaction commits when ``fn`` returns
        and rolls back when it raises.

        Raises:
            StorageError: If the storage engine fails (after rollback)
        """
        pass
