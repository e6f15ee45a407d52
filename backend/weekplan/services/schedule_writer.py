"""
Schedule writer: turn a day -> tasks allocation into timed entries and
replace the stored week atomically.
"""

from datetime import date, time
from typing import Mapping, Sequence

from weekplan.core.exceptions import ValidationError
from weekplan.core.logger import setup_logger
from weekplan.interfaces.schedule_repository import IScheduleRepository
from weekplan.models.schedule import (
    DEFAULT_ALLOCATION_HOURS,
    DEFAULT_DAY_START,
    ScheduleEntry,
    ScheduleEntryCreate,
)
from weekplan.models.task import Task
from weekplan.services.allocator import allocation_hours
from weekplan.utils.datetime_utils import (
    MINUTES_PER_DAY,
    business_day_index,
    hours_to_minutes,
    minutes_to_time,
    time_to_minutes,
)

logger = setup_logger(__name__)


def build_week_entries(
    day_to_tasks: Mapping[date, Sequence[Task]],
    day_start: time = DEFAULT_DAY_START,
    default_hours: float = DEFAULT_ALLOCATION_HOURS,
) -> list[ScheduleEntryCreate]:
    """
    Lay out each day's tasks back to back from ``day_start``.

    Capacity is advisory, so a day can hold more than fits before midnight.
    From the first task that would reach 24:00 onwards, that day's tasks are
    stored as date-only placeholders (no start or end time).

    Args:
        day_to_tasks: Allocation result, tasks in allocation order per date
        day_start: Running clock start for every day
        default_hours: Duration for tasks without an estimate

    Returns:
        Entries in day-of-week order, then allocation order

    Raises:
        ValidationError: If a date is not a business day
    """
    entries: list[ScheduleEntryCreate] = []
    for scheduled_date in sorted(day_to_tasks):
        day_of_week = business_day_index(scheduled_date)
        if day_of_week is None:
            raise ValidationError(
                "Only business days (Monday to Friday) can be scheduled",
                details={"date": scheduled_date.isoformat()},
            )

        clock = time_to_minutes(day_start)
        overflowed = 0
        for task in day_to_tasks[scheduled_date]:
            end_clock = clock + hours_to_minutes(allocation_hours(task, default_hours))
            if overflowed or end_clock >= MINUTES_PER_DAY:
                # Date-only placeholder; the rest of the day stays untimed
                overflowed += 1
                start = end = None
            else:
                start = minutes_to_time(clock)
                end = minutes_to_time(end_clock)
                clock = end_clock
            entries.append(
                ScheduleEntryCreate(
                    task_id=task.id,
                    day_of_week=day_of_week,
                    start_time=start,
                    end_time=end,
                    scheduled_date=scheduled_date,
                )
            )
        if overflowed:
            logger.warning(
                f"{overflowed} tasks on {scheduled_date} run past midnight; "
                "stored without a time slot"
            )
    return entries


async def commit_week(
    schedule_repo: IScheduleRepository,
    start_date: date,
    end_date: date,
    day_to_tasks: Mapping[date, Sequence[Task]],
    day_start: time = DEFAULT_DAY_START,
    default_hours: float = DEFAULT_ALLOCATION_HOURS,
) -> list[ScheduleEntry]:
    """
    Replace every entry in ``[start_date, end_date]`` with the given allocation.

    Entries are computed before storage is touched; delete and inserts then
    run in one transaction, so either the previous week or the new one is
    visible, never a mix. Re-running with the same arguments is safe.

    Returns:
        The inserted entries

    Raises:
        ValidationError: Bad range or allocation (nothing is written)
        StorageError: The transaction failed and was rolled back
    """
    if start_date > end_date:
        raise ValidationError(
            "start_date must not be after end_date",
            details={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        )
    outside = [day for day in day_to_tasks if not start_date <= day <= end_date]
    if outside:
        raise ValidationError(
            "Allocation contains dates outside the committed range",
            details={"dates": [day.isoformat() for day in sorted(outside)]},
        )

    rows = build_week_entries(day_to_tasks, day_start=day_start, default_hours=default_hours)

    async def _replace(tx: IScheduleRepository) -> list[ScheduleEntry]:
        deleted = await tx.delete_entries_for_date_range(start_date, end_date)
        inserted = [await tx.insert_entry(row) for row in rows]
        logger.info(
            f"Committed week {start_date}..{end_date}: "
            f"replaced {deleted} entries with {len(inserted)}"
        )
        return inserted

    return await schedule_repo.run_atomically(_replace)
