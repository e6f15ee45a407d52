"""
Schedule API endpoints.

Thin HTTP wrappers around ScheduleService. Domain errors are mapped to
status codes here: validation 400, missing 404, slot taken 409, storage 500.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from weekplan.api.deps import ScheduleServiceDep
from weekplan.core.exceptions import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
    WeekplanError,
)
from weekplan.core.logger import setup_logger
from weekplan.models.schedule import (
    GeneratedSchedule,
    GenerateScheduleRequest,
    MoveTaskRequest,
    MoveTaskResponse,
    ScheduledTask,
    ScheduleEntry,
    ScheduleEntryEditRequest,
    WeeklySchedule,
)

logger = setup_logger(__name__)

router = APIRouter()


def to_http_exception(exc: WeekplanError) -> HTTPException:
    """Map a domain error to the HTTP error the client should see."""
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)
    if isinstance(exc, StorageError):
        logger.error(f"Storage failure: {exc.message} ({exc.details})")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Failed to update the schedule",
    )


@router.get("", response_model=WeeklySchedule)
async def get_weekly_schedule(
    service: ScheduleServiceDep,
    reference_date: Optional[date] = Query(None, description="Any date in the week (default today)"),
):
    """Get the Monday-Friday schedule for a week."""
    return await service.get_weekly_schedule(reference_date)


@router.get("/days/{target_date}", response_model=list[ScheduledTask])
async def get_day_schedule(
    target_date: date,
    service: ScheduleServiceDep,
):
    """Get one day's entries ordered by start time."""
    return await service.get_day_schedule(target_date)


@router.post("/generate", response_model=GeneratedSchedule)
async def generate_schedule(
    payload: GenerateScheduleRequest,
    service: ScheduleServiceDep,
):
    """Allocate tasks over the week and replace its stored schedule."""
    try:
        return await service.generate_week(
            task_ids=payload.task_ids,
            reference_date=payload.reference_date,
        )
    except WeekplanError as e:
        raise to_http_exception(e)


@router.put("/move", response_model=MoveTaskResponse)
async def move_task(
    payload: MoveTaskRequest,
    service: ScheduleServiceDep,
):
    """Move a task to another business day and/or time."""
    try:
        entry = await service.move_task(
            payload.task_id,
            payload.target_date,
            payload.target_time,
        )
    except WeekplanError as e:
        raise to_http_exception(e)
    return MoveTaskResponse(message="Task moved", entry=entry)


@router.put("/{entry_id}", response_model=ScheduleEntry)
async def update_schedule_entry(
    entry_id: int,
    payload: ScheduleEntryEditRequest,
    service: ScheduleServiceDep,
):
    """Edit one entry's start time, end time and/or date."""
    try:
        return await service.update_entry(
            entry_id,
            start_time=payload.start_time,
            end_time=payload.end_time,
            scheduled_date=payload.scheduled_date,
        )
    except WeekplanError as e:
        raise to_http_exception(e)
