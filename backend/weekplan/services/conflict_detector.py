"""
Time-slot conflict detection.

Pure functions over an in-memory list of entries; callers fetch the entries
(inside their own transaction when the result guards a write).
"""

from datetime import date, time
from typing import Iterable, Optional

from weekplan.models.schedule import ScheduleEntry


def intervals_overlap(start1: time, end1: time, start2: time, end2: time) -> bool:
    """Half-open interval overlap: touching endpoints do not overlap."""
    return start1 < end2 and end1 > start2


def find_conflicts(
    target_date: date,
    start_time: time,
    end_time: time,
    existing_entries: Iterable[ScheduleEntry],
    exclude_task_id: Optional[int] = None,
) -> list[ScheduleEntry]:
    """
    Get the entries on ``target_date`` that overlap ``[start_time, end_time)``.

    Args:
        target_date: Date being scheduled
        start_time: Proposed start
        end_time: Proposed end
        existing_entries: Entries for the date (entries for other dates are ignored)
        exclude_task_id: Task whose own entries should be skipped (the one being moved)

    Returns:
        Conflicting entries in input order
    """
    conflicts = []
    for entry in existing_entries:
        if entry.scheduled_date != target_date:
            continue
        if exclude_task_id is not None and entry.task_id == exclude_task_id:
            continue
        # Date-only placeholders never block a slot
        if entry.start_time is None or entry.end_time is None:
            continue
        if intervals_overlap(start_time, end_time, entry.start_time, entry.end_time):
            conflicts.append(entry)
    return conflicts


def has_conflict(
    target_date: date,
    start_time: time,
    end_time: time,
    existing_entries: Iterable[ScheduleEntry],
    exclude_task_id: Optional[int] = None,
) -> bool:
    """Check whether the interval overlaps any scheduled entry on that date."""
    return bool(
        find_conflicts(target_date, start_time, end_time, existing_entries, exclude_task_id)
    )
