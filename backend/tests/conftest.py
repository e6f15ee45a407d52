"""
Shared pytest fixtures.

Each test gets its own file-backed SQLite database so that transactions,
rollbacks and separate sessions behave as they do in production.
"""

from datetime import date

import pytest

from weekplan.core.config import Settings
from weekplan.infrastructure.local.database import Database
from weekplan.infrastructure.local.schedule_repository import SqliteScheduleRepository
from weekplan.infrastructure.local.task_repository import SqliteTaskRepository
from weekplan.models.enums import TaskPriority
from weekplan.models.task import TaskCreate

# Monday 2024-01-08 .. Friday 2024-01-12
WEEK_OF_2024_01_08 = [date(2024, 1, day) for day in range(8, 13)]


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        ENVIRONMENT="test",
        DEBUG=False,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'weekplan-test.db'}",
    )


@pytest.fixture
async def database(test_settings):
    db = Database(test_settings.DATABASE_URL)
    await db.init()
    yield db
    await db.dispose()


@pytest.fixture
def session_factory(database):
    return database.session_factory


@pytest.fixture
def task_repo(session_factory):
    return SqliteTaskRepository(session_factory=session_factory)


@pytest.fixture
def schedule_repo(session_factory):
    return SqliteScheduleRepository(session_factory=session_factory)


@pytest.fixture
def week_dates_2024_01_08():
    return list(WEEK_OF_2024_01_08)


@pytest.fixture
def create_task(task_repo):
    """Factory fixture: persist a task and return it."""

    async def _create(
        title: str = "Task",
        priority: TaskPriority = TaskPriority.WANT,
        estimated_hours: float | None = None,
        **kwargs,
    ):
        return await task_repo.create(
            TaskCreate(
                title=title,
                priority=priority,
                estimated_hours=estimated_hours,
                **kwargs,
            )
        )

    return _create
