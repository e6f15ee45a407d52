"""
Greedy weekly allocation of tasks to business days.

The heuristic is deliberately simple and deterministic:

1. ``must`` tasks before ``want`` tasks, longer tasks first within a priority.
2. Each task goes to the least-loaded day that still fits under the daily
   capacity (earliest date wins ties).
3. If no day fits, the task overflows onto the least-loaded day. Capacity is
   a soft budget, never a reason to drop a task.
"""

from datetime import date
from typing import Iterable, Optional

from weekplan.core.exceptions import ValidationError
from weekplan.core.logger import setup_logger
from weekplan.models.enums import TaskPriority
from weekplan.models.schedule import DEFAULT_ALLOCATION_HOURS, DEFAULT_DAILY_CAPACITY_HOURS
from weekplan.models.task import Task

logger = setup_logger(__name__)


def allocation_hours(task: Task, default_hours: float = DEFAULT_ALLOCATION_HOURS) -> float:
    """Hours a task occupies for allocation purposes."""
    if task.estimated_hours is None:
        return default_hours
    return task.estimated_hours


def sort_tasks_for_allocation(
    tasks: Iterable[Task],
    default_hours: float = DEFAULT_ALLOCATION_HOURS,
) -> list[Task]:
    """Order tasks: must before want, then descending hours. Stable for ties."""
    return sorted(
        tasks,
        key=lambda task: (
            task.priority != TaskPriority.MUST,
            -allocation_hours(task, default_hours),
        ),
    )


def _pick_day(
    target_dates: list[date],
    used: dict[date, float],
    hours: float,
    capacity: float,
) -> date:
    best_day: Optional[date] = None
    min_usage = float("inf")
    for day in target_dates:
        if used[day] + hours <= capacity and used[day] < min_usage:
            min_usage = used[day]
            best_day = day

    if best_day is None:
        # min() keeps the first of equal values, so the earliest date wins
        best_day = min(target_dates, key=lambda day: used[day])
    return best_day


def allocate(
    tasks: Iterable[Task],
    target_dates: list[date],
    daily_capacity_hours: float = DEFAULT_DAILY_CAPACITY_HOURS,
    default_hours: float = DEFAULT_ALLOCATION_HOURS,
) -> dict[date, list[Task]]:
    """
    Assign each task to exactly one target date.

    Args:
        tasks: Tasks to place
        target_dates: Candidate dates, iterated in the given order for tie-breaks
        daily_capacity_hours: Soft per-day budget
        default_hours: Duration assumed for tasks without an estimate

    Returns:
        Mapping with every target date as a key (possibly empty lists),
        tasks in allocation order

    Raises:
        ValidationError: If there are no target dates
    """
    if not target_dates:
        raise ValidationError("At least one target date is required for allocation")

    schedule: dict[date, list[Task]] = {day: [] for day in target_dates}
    used: dict[date, float] = {day: 0.0 for day in target_dates}

    sorted_tasks = sort_tasks_for_allocation(tasks, default_hours)
    overflow_count = 0
    for task in sorted_tasks:
        hours = allocation_hours(task, default_hours)
        day = _pick_day(target_dates, used, hours, daily_capacity_hours)
        if used[day] + hours > daily_capacity_hours:
            overflow_count += 1
        schedule[day].append(task)
        used[day] += hours

    logger.info(
        f"Allocated {len(sorted_tasks)} tasks over {len(target_dates)} days "
        f"(capacity {daily_capacity_hours}h/day, {overflow_count} over capacity)"
    )
    return schedule
