"""
SQLite implementation of the task repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from weekplan.infrastructure.local.database import TaskORM
from weekplan.interfaces.task_repository import ITaskRepository
from weekplan.models.enums import TaskStatus
from weekplan.models.task import Task, TaskCreate


class SqliteTaskRepository(ITaskRepository):
    """SQLite implementation of task repository."""

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def _orm_to_model(self, orm: TaskORM) -> Task:
        """Convert ORM object to Pydantic model."""
        return Task.model_validate(orm, from_attributes=True)

    async def create(self, task: TaskCreate) -> Task:
        async with self._session_factory() as session:
            orm = TaskORM(
                title=task.title,
                description=task.description,
                priority=task.priority.value,
                category=task.category,
                estimated_hours=task.estimated_hours,
                status=task.status.value,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, task_id: int) -> Optional[Task]:
        async with self._session_factory() as session:
            result = await session.execute(select(TaskORM).where(TaskORM.id == task_id))
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def get_many(self, task_ids: list[int]) -> list[Task]:
        if not task_ids:
            return []
        async with self._session_factory() as session:
            result = await session.execute(select(TaskORM).where(TaskORM.id.in_(task_ids)))
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list(
        self,
        status: Optional[TaskStatus] = None,
        include_completed: bool = True,
    ) -> list[Task]:
        async with self._session_factory() as session:
            query = select(TaskORM)
            if status:
                query = query.where(TaskORM.status == status.value)
            elif not include_completed:
                query = query.where(TaskORM.status != TaskStatus.COMPLETED.value)
            query = query.order_by(TaskORM.created_at.asc(), TaskORM.id.asc())
            result = await session.execute(query)
            return [self._orm_to_model(orm) for orm in result.scalars().all()]
