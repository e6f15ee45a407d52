from datetime import date, datetime, time
from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException

from weekplan.api import schedule as schedule_api
from weekplan.api.schedule import (
    generate_schedule,
    move_task,
    to_http_exception,
    update_schedule_entry,
)
from weekplan.core.exceptions import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from weekplan.models.schedule import (
    GenerateScheduleRequest,
    MoveTaskRequest,
    ScheduleEntry,
    ScheduleEntryEditRequest,
)


def _make_entry(entry_id: int = 1, task_id: int = 10) -> ScheduleEntry:
    return ScheduleEntry(
        id=entry_id,
        task_id=task_id,
        day_of_week=3,
        start_time=time(14, 0),
        end_time=time(15, 0),
        scheduled_date=date(2024, 1, 10),
        created_at=datetime(2024, 1, 1, 9, 0),
    )


@pytest.mark.parametrize(
    "error, status_code",
    [
        (ValidationError("bad"), 400),
        (NotFoundError("missing"), 404),
        (ConflictError("taken", conflicting_entry_ids=[3]), 409),
        (StorageError("Schedule transaction failed", details="disk I/O error"), 500),
    ],
)
def test_to_http_exception_maps_domain_errors(error, status_code) -> None:
    exc = to_http_exception(error)

    assert exc.status_code == status_code


def test_storage_error_detail_is_not_leaked() -> None:
    exc = to_http_exception(StorageError("Schedule transaction failed", details="secret path"))

    assert exc.detail == "Failed to update the schedule"


@pytest.mark.asyncio
async def test_move_task_returns_message_and_entry() -> None:
    service = AsyncMock()
    service.move_task.return_value = _make_entry()

    response = await move_task(
        payload=MoveTaskRequest(task_id=10, target_date="2024-01-10", target_time="14:00"),
        service=service,
    )

    service.move_task.assert_awaited_once_with(10, "2024-01-10", "14:00")
    assert response.message == "Task moved"
    assert response.entry.task_id == 10


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, status_code, detail",
    [
        (
            ValidationError("Only business days (Monday to Friday) can be scheduled"),
            400,
            "Only business days (Monday to Friday) can be scheduled",
        ),
        (NotFoundError("Task 10 not found"), 404, "Task 10 not found"),
        (
            ConflictError("Another task is already scheduled in that time slot", [7]),
            409,
            "Another task is already scheduled in that time slot",
        ),
    ],
)
async def test_move_task_maps_service_errors(error, status_code, detail) -> None:
    service = AsyncMock()
    service.move_task.side_effect = error

    with pytest.raises(HTTPException) as exc_info:
        await move_task(
            payload=MoveTaskRequest(task_id=10, target_date="2024-01-13"),
            service=service,
        )

    assert exc_info.value.status_code == status_code
    assert exc_info.value.detail == detail


@pytest.mark.asyncio
async def test_update_entry_passes_partial_fields() -> None:
    service = AsyncMock()
    service.update_entry.return_value = _make_entry(entry_id=5)

    result = await update_schedule_entry(
        entry_id=5,
        payload=ScheduleEntryEditRequest(end_time="16:00"),
        service=service,
    )

    service.update_entry.assert_awaited_once_with(
        5, start_time=None, end_time="16:00", scheduled_date=None
    )
    assert result.id == 5


@pytest.mark.asyncio
async def test_update_entry_storage_failure_is_500() -> None:
    service = AsyncMock()
    service.update_entry.side_effect = StorageError("Schedule transaction failed")

    with pytest.raises(HTTPException) as exc_info:
        await update_schedule_entry(
            entry_id=5,
            payload=ScheduleEntryEditRequest(start_time="09:00"),
            service=service,
        )

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_generate_schedule_forwards_request() -> None:
    service = AsyncMock()
    service.generate_week.return_value = "generated"

    result = await generate_schedule(
        payload=GenerateScheduleRequest(task_ids=[1, 2], reference_date=date(2024, 1, 10)),
        service=service,
    )

    service.generate_week.assert_awaited_once_with(
        task_ids=[1, 2], reference_date=date(2024, 1, 10)
    )
    assert result == "generated"


@pytest.mark.asyncio
async def test_generate_schedule_without_tasks_is_400() -> None:
    service = AsyncMock()
    service.generate_week.side_effect = ValidationError("There are no tasks to schedule")

    with pytest.raises(HTTPException) as exc_info:
        await schedule_api.generate_schedule(payload=GenerateScheduleRequest(), service=service)

    assert exc_info.value.status_code == 400
