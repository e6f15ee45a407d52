"""
SQLite implementation of the schedule repository.

A repository either owns its sessions (one session and commit per call) or is
bound to the session of an enclosing ``run_atomically`` call, in which case
it only flushes and leaves commit/rollback to the transaction.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator, Awaitable, Callable, Optional, TypeVar

from sqlalchemy import and_, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from weekplan.core.exceptions import StorageError
from weekplan.core.logger import setup_logger
from weekplan.infrastructure.local.database import TaskORM, TaskScheduleORM
from weekplan.interfaces.schedule_repository import IScheduleRepository
from weekplan.models.schedule import (
    ScheduleEntry,
    ScheduleEntryCreate,
    ScheduleEntryUpdate,
    ScheduledTask,
)
from weekplan.utils.datetime_utils import format_hhmm, parse_hhmm

logger = setup_logger(__name__)

T = TypeVar("T")


class SqliteScheduleRepository(IScheduleRepository):
    """SQLite implementation of schedule repository."""

    def __init__(self, session_factory, session: Optional[AsyncSession] = None):
        self._session_factory = session_factory
        self._session = session

    @asynccontextmanager
    async def _session_scope(self) -> AsyncIterator[AsyncSession]:
        if self._session is not None:
            yield self._session
            return
        async with self._session_factory() as session:
            yield session
            await session.commit()

    @staticmethod
    def _orm_to_model(orm: TaskScheduleORM) -> ScheduleEntry:
        return ScheduleEntry(
            id=orm.id,
            task_id=orm.task_id,
            day_of_week=orm.day_of_week,
            start_time=parse_hhmm(orm.start_time),
            end_time=parse_hhmm(orm.end_time),
            scheduled_date=orm.scheduled_date,
            created_at=orm.created_at,
        )

    @staticmethod
    def _joined_to_model(schedule: TaskScheduleORM, task: TaskORM) -> ScheduledTask:
        return ScheduledTask(
            id=schedule.id,
            task_id=schedule.task_id,
            day_of_week=schedule.day_of_week,
            start_time=parse_hhmm(schedule.start_time),
            end_time=parse_hhmm(schedule.end_time),
            scheduled_date=schedule.scheduled_date,
            created_at=schedule.created_at,
            title=task.title,
            description=task.description,
            priority=task.priority,
            category=task.category,
            estimated_hours=task.estimated_hours,
            actual_hours=task.actual_hours,
            status=task.status,
        )

    # ===========================================
    # Reads
    # ===========================================

    async def entries_for_date(self, target_date: date) -> list[ScheduleEntry]:
        async with self._session_scope() as session:
            result = await session.execute(
                select(TaskScheduleORM)
                .where(TaskScheduleORM.scheduled_date == target_date)
                .order_by(
                    TaskScheduleORM.start_time.is_(None),
                    TaskScheduleORM.start_time.asc(),
                    TaskScheduleORM.id.asc(),
                )
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def entries_for_date_range(
        self,
        start_date: date,
        end_date: date,
    ) -> list[ScheduleEntry]:
        async with self._session_scope() as session:
            result = await session.execute(
                select(TaskScheduleORM)
                .where(
                    and_(
                        TaskScheduleORM.scheduled_date >= start_date,
                        TaskScheduleORM.scheduled_date <= end_date,
                    )
                )
                .order_by(
                    TaskScheduleORM.scheduled_date.asc(),
                    TaskScheduleORM.start_time.is_(None),
                    TaskScheduleORM.start_time.asc(),
                    TaskScheduleORM.id.asc(),
                )
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def scheduled_tasks_for_date(self, target_date: date) -> list[ScheduledTask]:
        return await self.scheduled_tasks_for_date_range(target_date, target_date)

    async def scheduled_tasks_for_date_range(
        self,
        start_date: date,
        end_date: date,
    ) -> list[ScheduledTask]:
        async with self._session_scope() as session:
            result = await session.execute(
                select(TaskScheduleORM, TaskORM)
                .join(TaskORM, TaskORM.id == TaskScheduleORM.task_id)
                .where(
                    and_(
                        TaskScheduleORM.scheduled_date >= start_date,
                        TaskScheduleORM.scheduled_date <= end_date,
                    )
                )
                .order_by(
                    TaskScheduleORM.scheduled_date.asc(),
                    TaskScheduleORM.start_time.is_(None),
                    TaskScheduleORM.start_time.asc(),
                    TaskScheduleORM.id.asc(),
                )
            )
            return [self._joined_to_model(schedule, task) for schedule, task in result.all()]

    async def get_entry(self, entry_id: int) -> Optional[ScheduleEntry]:
        async with self._session_scope() as session:
            orm = await session.get(TaskScheduleORM, entry_id)
            return self._orm_to_model(orm) if orm else None

    # ===========================================
    # Writes
    # ===========================================

    async def delete_entries_for_date_range(self, start_date: date, end_date: date) -> int:
        async with self._session_scope() as session:
            result = await session.execute(
                delete(TaskScheduleORM).where(
                    and_(
                        TaskScheduleORM.scheduled_date >= start_date,
                        TaskScheduleORM.scheduled_date <= end_date,
                    )
                )
            )
            return result.rowcount or 0

    async def delete_entries_for_task(self, task_id: int) -> int:
        async with self._session_scope() as session:
            result = await session.execute(
                delete(TaskScheduleORM).where(TaskScheduleORM.task_id == task_id)
            )
            return result.rowcount or 0

    async def insert_entry(self, entry: ScheduleEntryCreate) -> ScheduleEntry:
        async with self._session_scope() as session:
            orm = TaskScheduleORM(
                task_id=entry.task_id,
                day_of_week=entry.day_of_week,
                start_time=format_hhmm(entry.start_time),
                end_time=format_hhmm(entry.end_time),
                scheduled_date=entry.scheduled_date,
            )
            session.add(orm)
            await session.flush()
            return self._orm_to_model(orm)

    async def update_entry(
        self,
        entry_id: int,
        update: ScheduleEntryUpdate,
    ) -> Optional[ScheduleEntry]:
        async with self._session_scope() as session:
            orm = await session.get(TaskScheduleORM, entry_id)
            if not orm:
                return None
            if update.day_of_week is not None:
                orm.day_of_week = update.day_of_week
            if update.start_time is not None:
                orm.start_time = format_hhmm(update.start_time)
            if update.end_time is not None:
                orm.end_time = format_hhmm(update.end_time)
            if update.scheduled_date is not None:
                orm.scheduled_date = update.scheduled_date
            await session.flush()
            return self._orm_to_model(orm)

    # ===========================================
    # Transactions
    # ===========================================

    async def run_atomically(
        self,
        fn: Callable[[IScheduleRepository], Awaitable[T]],
    ) -> T:
        if self._session is not None:
            # Already inside a transaction; nest into it
            return await fn(self)

        async with self._session_factory() as session:
            try:
                async with session.begin():
                    bound = SqliteScheduleRepository(self._session_factory, session=session)
                    return await fn(bound)
            except SQLAlchemyError as exc:
                logger.error(f"Schedule transaction rolled back: {exc}")
                raise StorageError("Schedule transaction failed", details=str(exc)) from exc
