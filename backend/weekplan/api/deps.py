"""
Dependency injection for API endpoints.

Repositories are built per request from the ``Database`` that the
application lifespan stores on ``app.state``.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from weekplan.core.config import Settings, get_settings
from weekplan.infrastructure.local.database import Database
from weekplan.interfaces.schedule_repository import IScheduleRepository
from weekplan.interfaces.task_repository import ITaskRepository
from weekplan.services.schedule_service import ScheduleService


def get_database(request: Request) -> Database:
    """Get the database handle owned by the running application."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is not initialized",
        )
    return database


# ===========================================
# Repository Dependencies
# ===========================================


def get_task_repository(
    database: Annotated[Database, Depends(get_database)],
) -> ITaskRepository:
    """Get task repository instance."""
    from weekplan.infrastructure.local.task_repository import SqliteTaskRepository

    return SqliteTaskRepository(database.session_factory)


def get_schedule_repository(
    database: Annotated[Database, Depends(get_database)],
) -> IScheduleRepository:
    """Get schedule repository instance."""
    from weekplan.infrastructure.local.schedule_repository import SqliteScheduleRepository

    return SqliteScheduleRepository(database.session_factory)


TaskRepo = Annotated[ITaskRepository, Depends(get_task_repository)]
ScheduleRepo = Annotated[IScheduleRepository, Depends(get_schedule_repository)]


# ===========================================
# Service Dependencies
# ===========================================


def get_schedule_service(
    task_repo: TaskRepo,
    schedule_repo: ScheduleRepo,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ScheduleService:
    return ScheduleService(task_repo, schedule_repo, settings=settings)


ScheduleServiceDep = Annotated[ScheduleService, Depends(get_schedule_service)]
