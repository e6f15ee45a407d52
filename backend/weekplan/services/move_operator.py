"""
Single-row schedule changes: moving a task and editing one entry.

Both paths run the conflict check inside the same transaction as the write,
so a check and the change it guards cannot interleave with another writer
beyond what the storage engine's isolation allows.
"""

from datetime import date, time
from typing import Optional

from weekplan.core.exceptions import ConflictError, NotFoundError, ValidationError
from weekplan.core.logger import setup_logger
from weekplan.interfaces.schedule_repository import IScheduleRepository
from weekplan.interfaces.task_repository import ITaskRepository
from weekplan.models.schedule import (
    DEFAULT_MOVE_HOURS,
    DEFAULT_MOVE_TIME,
    ScheduleEntry,
    ScheduleEntryCreate,
    ScheduleEntryUpdate,
)
from weekplan.services.conflict_detector import find_conflicts
from weekplan.services.schedule_validation import ensure_time_order
from weekplan.utils.datetime_utils import add_hours, business_day_index

logger = setup_logger(__name__)


async def _ensure_slot_free(
    tx: IScheduleRepository,
    target_date: date,
    start_time: time,
    end_time: time,
    exclude_task_id: int,
) -> None:
    existing = await tx.entries_for_date(target_date)
    conflicts = find_conflicts(target_date, start_time, end_time, existing, exclude_task_id)
    if conflicts:
        raise ConflictError(
            "Another task is already scheduled in that time slot",
            conflicting_entry_ids=[entry.id for entry in conflicts],
        )


async def move_task(
    schedule_repo: IScheduleRepository,
    task_repo: ITaskRepository,
    task_id: int,
    target_date: date,
    target_time: Optional[time] = None,
    default_time: time = DEFAULT_MOVE_TIME,
    default_hours: float = DEFAULT_MOVE_HOURS,
) -> bool:
    """
    Relocate a task (scheduled or not) to ``target_date`` at ``target_time``.

    The business-day check happens before anything is deleted, so a rejected
    move leaves the task where it was.

    Returns:
        True on success, False if the target is not a business day

    Raises:
        NotFoundError: Unknown task
        ValidationError: The slot would run past midnight or has zero length
        ConflictError: The slot overlaps another task's entry
        StorageError: The transaction failed and was rolled back
    """
    day_of_week = business_day_index(target_date)
    if day_of_week is None:
        logger.warning(f"Refusing to move task {task_id} to non-business day {target_date}")
        return False

    task = await task_repo.get(task_id)
    if not task:
        raise NotFoundError(f"Task {task_id} not found")

    start_time = default_time if target_time is None else target_time
    hours = default_hours if task.estimated_hours is None else task.estimated_hours
    end_time = add_hours(start_time, hours)
    ensure_time_order(start_time, end_time)

    async def _move(tx: IScheduleRepository) -> None:
        await _ensure_slot_free(tx, target_date, start_time, end_time, task_id)
        removed = await tx.delete_entries_for_task(task_id)
        await tx.insert_entry(
            ScheduleEntryCreate(
                task_id=task_id,
                day_of_week=day_of_week,
                start_time=start_time,
                end_time=end_time,
                scheduled_date=target_date,
            )
        )
        logger.info(
            f"Moved task {task_id} to {target_date} {start_time:%H:%M}-{end_time:%H:%M} "
            f"(replaced {removed} entries)"
        )

    await schedule_repo.run_atomically(_move)
    return True


async def reschedule_entry(
    schedule_repo: IScheduleRepository,
    entry_id: int,
    start_time: Optional[time] = None,
    end_time: Optional[time] = None,
    scheduled_date: Optional[date] = None,
) -> Optional[ScheduleEntry]:
    """
    Change the time and/or date of one existing entry.

    Fields left as None keep their stored value. The merged entry must sit on
    a business day, have start strictly before end, and not overlap another
    task on its (possibly new) date.

    Returns:
        The updated entry, or None if ``entry_id`` does not exist

    Raises:
        ValidationError: Non-business day or inverted interval
        ConflictError: The slot overlaps another task's entry
        StorageError: The transaction failed and was rolled back
    """

    async def _reschedule(tx: IScheduleRepository) -> Optional[ScheduleEntry]:
        current = await tx.get_entry(entry_id)
        if not current:
            return None

        new_date = current.scheduled_date if scheduled_date is None else scheduled_date
        new_start = current.start_time if start_time is None else start_time
        new_end = current.end_time if end_time is None else end_time

        day_of_week = business_day_index(new_date)
        if day_of_week is None:
            raise ValidationError(
                "Only business days (Monday to Friday) can be scheduled",
                details={"date": new_date.isoformat()},
            )
        if new_start is not None and new_end is not None:
            if new_start >= new_end:
                raise ValidationError("Start time must be before end time")
            await _ensure_slot_free(tx, new_date, new_start, new_end, current.task_id)

        updated = await tx.update_entry(
            entry_id,
            ScheduleEntryUpdate(
                day_of_week=day_of_week,
                start_time=start_time,
                end_time=end_time,
                scheduled_date=scheduled_date,
            ),
        )
        logger.info(f"Rescheduled entry {entry_id} to {new_date} {new_start}-{new_end}")
        return updated

    return await schedule_repo.run_atomically(_reschedule)
