"""
Schedule service: orchestrates the weekly scheduling operations.

Handles input validation, task lookup and wiring of the allocator, the
schedule writer and the move operator against explicitly injected
repositories.
"""

from datetime import date, time
from typing import Optional

from weekplan.core.config import Settings, get_settings
from weekplan.core.exceptions import NotFoundError, ValidationError
from weekplan.core.logger import setup_logger
from weekplan.interfaces.schedule_repository import IScheduleRepository
from weekplan.interfaces.task_repository import ITaskRepository
from weekplan.models.schedule import (
    GeneratedSchedule,
    ScheduledTask,
    ScheduleEntry,
    WeeklySchedule,
)
from weekplan.models.task import Task
from weekplan.services import move_operator
from weekplan.services.allocator import allocate
from weekplan.services.conflict_detector import has_conflict
from weekplan.services.schedule_validation import (
    ensure_business_day,
    ensure_time_order,
    parse_date_string,
    parse_optional_time,
    parse_time_string,
)
from weekplan.services.schedule_writer import commit_week
from weekplan.utils.datetime_utils import week_dates

logger = setup_logger(__name__)


class ScheduleService:
    """
    Service for weekly schedule generation and manual overrides.

    Provides:
    - Week generation (allocate + atomic commit)
    - Weekly / daily schedule views
    - Task moves and single-entry edits with conflict checks
    """

    def __init__(
        self,
        task_repo: ITaskRepository,
        schedule_repo: IScheduleRepository,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize schedule service.

        Args:
            task_repo: Task store
            schedule_repo: Schedule entry store
            settings: Scheduling defaults (None = application settings)
        """
        settings = settings or get_settings()
        self.task_repo = task_repo
        self.schedule_repo = schedule_repo
        self.daily_capacity_hours = settings.DAILY_CAPACITY_HOURS
        self.default_allocation_hours = settings.DEFAULT_ALLOCATION_HOURS
        self.default_move_hours = settings.DEFAULT_MOVE_HOURS
        self.day_start: time = parse_time_string(settings.DAY_START, "DAY_START")
        self.default_move_time: time = parse_time_string(
            settings.DEFAULT_MOVE_TIME, "DEFAULT_MOVE_TIME"
        )

    # ===========================================
    # Generation
    # ===========================================

    async def _load_tasks(self, task_ids: Optional[list[int]]) -> list[Task]:
        if task_ids is None:
            return await self.task_repo.list(include_completed=False)

        unique_ids = list(dict.fromkeys(task_ids))
        found = {task.id: task for task in await self.task_repo.get_many(unique_ids)}
        missing = [task_id for task_id in unique_ids if task_id not in found]
        if missing:
            raise NotFoundError(f"Tasks not found: {missing}", details={"task_ids": missing})
        # Keep request order; it decides allocation tie-breaks
        return [found[task_id] for task_id in unique_ids]

    async def generate_week(
        self,
        task_ids: Optional[list[int]] = None,
        reference_date: Optional[date] = None,
    ) -> GeneratedSchedule:
        """
        Allocate tasks over the ISO business week and persist the result.

        Args:
            task_ids: Tasks to schedule (None = every task not yet completed)
            reference_date: Any date in the target week (None = today)

        Returns:
            The allocation and the committed entries

        Raises:
            ValidationError: No tasks to schedule
            NotFoundError: Some task_ids do not exist
        """
        tasks = await self._load_tasks(task_ids)
        if not tasks:
            raise ValidationError("There are no tasks to schedule")

        dates = week_dates(reference_date)
        allocations = allocate(
            tasks,
            dates,
            daily_capacity_hours=self.daily_capacity_hours,
            default_hours=self.default_allocation_hours,
        )
        entries = await commit_week(
            self.schedule_repo,
            dates[0],
            dates[-1],
            allocations,
            day_start=self.day_start,
            default_hours=self.default_allocation_hours,
        )
        return GeneratedSchedule(
            start_date=dates[0],
            end_date=dates[-1],
            allocations=allocations,
            entries=entries,
        )

    # ===========================================
    # Views
    # ===========================================

    async def get_weekly_schedule(self, reference_date: Optional[date] = None) -> WeeklySchedule:
        """Get the week's entries grouped by date (all five dates present)."""
        dates = week_dates(reference_date)
        days: dict[date, list[ScheduledTask]] = {day: [] for day in dates}
        rows = await self.schedule_repo.scheduled_tasks_for_date_range(dates[0], dates[-1])
        for row in rows:
            days.setdefault(row.scheduled_date, []).append(row)
        return WeeklySchedule(start_date=dates[0], end_date=dates[-1], days=days)

    async def get_day_schedule(self, target_date: date) -> list[ScheduledTask]:
        return await self.schedule_repo.scheduled_tasks_for_date(target_date)

    async def check_conflict(
        self,
        target_date: date,
        start_time: time,
        end_time: time,
        exclude_task_id: Optional[int] = None,
    ) -> bool:
        """Check a slot against the stored entries for that date."""
        ensure_time_order(start_time, end_time)
        entries = await self.schedule_repo.entries_for_date(target_date)
        return has_conflict(target_date, start_time, end_time, entries, exclude_task_id)

    # ===========================================
    # Manual overrides
    # ===========================================

    async def move_task(
        self,
        task_id: int,
        target_date: str,
        target_time: Optional[str] = None,
    ) -> ScheduleEntry:
        """
        Move a task to ``target_date`` (``YYYY-MM-DD``) at ``target_time`` (``HH:MM``).

        Every input check runs before storage is touched, so an invalid
        request leaves the task's current entry in place.

        Returns:
            The task's new entry

        Raises:
            ValidationError: Malformed input or non-business day
            NotFoundError: Unknown task
            ConflictError: Slot already taken
        """
        parsed_date = parse_date_string(target_date, "target_date")
        parsed_time = parse_optional_time(target_time, "target_time")
        ensure_business_day(parsed_date)

        moved = await move_operator.move_task(
            self.schedule_repo,
            self.task_repo,
            task_id,
            parsed_date,
            parsed_time,
            default_time=self.default_move_time,
            default_hours=self.default_move_hours,
        )
        if not moved:
            raise ValidationError(
                "Only business days (Monday to Friday) can be scheduled",
                details={"date": target_date},
            )

        entries = await self.schedule_repo.entries_for_date(parsed_date)
        return next(entry for entry in entries if entry.task_id == task_id)

    async def update_entry(
        self,
        entry_id: int,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        scheduled_date: Optional[str] = None,
    ) -> ScheduleEntry:
        """
        Edit the start time, end time and/or date of one entry.

        Raises:
            ValidationError: Nothing to update, malformed input, non-business
                day or start not before end
            NotFoundError: Unknown entry
            ConflictError: Slot already taken
        """
        if not start_time and not end_time and not scheduled_date:
            raise ValidationError("Specify at least one field to update")

        parsed_date = parse_date_string(scheduled_date, "scheduled_date") if scheduled_date else None
        if parsed_date is not None:
            ensure_business_day(parsed_date)
        parsed_start = parse_optional_time(start_time, "start_time")
        parsed_end = parse_optional_time(end_time, "end_time")
        ensure_time_order(parsed_start, parsed_end)

        updated = await move_operator.reschedule_entry(
            self.schedule_repo,
            entry_id,
            start_time=parsed_start,
            end_time=parsed_end,
            scheduled_date=parsed_date,
        )
        if updated is None:
            raise NotFoundError(f"Schedule entry {entry_id} not found")
        return updated
