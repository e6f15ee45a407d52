"""
Unit tests for SqliteScheduleRepository.
"""

from datetime import date, time

import pytest

from weekplan.core.exceptions import ConflictError, StorageError
from weekplan.models.enums import TaskPriority, TaskStatus
from weekplan.models.schedule import ScheduleEntryCreate, ScheduleEntryUpdate

MONDAY = date(2024, 1, 8)
TUESDAY = date(2024, 1, 9)
FRIDAY = date(2024, 1, 12)


def entry_for(task_id: int, day: date, start: time | None, end: time | None) -> ScheduleEntryCreate:
    return ScheduleEntryCreate(
        task_id=task_id,
        day_of_week=day.isoweekday(),
        start_time=start,
        end_time=end,
        scheduled_date=day,
    )


@pytest.mark.asyncio
async def test_insert_and_get_entry(schedule_repo, create_task):
    task = await create_task("Insert", estimated_hours=1)

    created = await schedule_repo.insert_entry(entry_for(task.id, MONDAY, time(10, 0), time(11, 0)))
    fetched = await schedule_repo.get_entry(created.id)

    assert created.id is not None
    assert fetched == created
    assert fetched.start_time == time(10, 0)


@pytest.mark.asyncio
async def test_get_entry_not_found(schedule_repo):
    assert await schedule_repo.get_entry(123) is None


@pytest.mark.asyncio
async def test_entries_for_date_ordered_by_start_time(schedule_repo, create_task):
    first = await create_task("First")
    second = await create_task("Second")
    await schedule_repo.insert_entry(entry_for(second.id, MONDAY, time(14, 0), time(15, 0)))
    await schedule_repo.insert_entry(entry_for(first.id, MONDAY, time(9, 30), time(10, 0)))
    await schedule_repo.insert_entry(entry_for(first.id, TUESDAY, time(8, 0), time(9, 0)))

    entries = await schedule_repo.entries_for_date(MONDAY)

    assert [e.start_time for e in entries] == [time(9, 30), time(14, 0)]


@pytest.mark.asyncio
async def test_date_only_entries_round_trip(schedule_repo, create_task):
    task = await create_task("Placeholder")

    created = await schedule_repo.insert_entry(entry_for(task.id, FRIDAY, None, None))

    [stored] = await schedule_repo.entries_for_date(FRIDAY)
    assert stored == created
    assert stored.start_time is None and stored.end_time is None


@pytest.mark.asyncio
async def test_scheduled_tasks_join_task_fields(schedule_repo, create_task):
    task = await create_task("Joined", TaskPriority.MUST, estimated_hours=3, category="ops")
    await schedule_repo.insert_entry(entry_for(task.id, TUESDAY, time(10, 0), time(13, 0)))

    [row] = await schedule_repo.scheduled_tasks_for_date_range(MONDAY, FRIDAY)

    assert row.title == "Joined"
    assert row.priority == TaskPriority.MUST
    assert row.category == "ops"
    assert row.status == TaskStatus.PENDING
    assert row.estimated_hours == 3
    assert await schedule_repo.scheduled_tasks_for_date(MONDAY) == []


@pytest.mark.asyncio
async def test_delete_entries_for_date_range_counts_rows(schedule_repo, create_task):
    task = await create_task("Delete")
    for day in (MONDAY, TUESDAY, date(2024, 1, 15)):
        await schedule_repo.insert_entry(entry_for(task.id, day, time(10, 0), time(11, 0)))

    deleted = await schedule_repo.delete_entries_for_date_range(MONDAY, FRIDAY)

    assert deleted == 2
    assert await schedule_repo.entries_for_date_range(MONDAY, FRIDAY) == []
    assert len(await schedule_repo.entries_for_date(date(2024, 1, 15))) == 1


@pytest.mark.asyncio
async def test_delete_entries_for_task(schedule_repo, create_task):
    keep = await create_task("Keep")
    drop = await create_task("Drop")
    await schedule_repo.insert_entry(entry_for(keep.id, MONDAY, time(10, 0), time(11, 0)))
    await schedule_repo.insert_entry(entry_for(drop.id, MONDAY, time(11, 0), time(12, 0)))
    await schedule_repo.insert_entry(entry_for(drop.id, TUESDAY, time(11, 0), time(12, 0)))

    assert await schedule_repo.delete_entries_for_task(drop.id) == 2
    assert await schedule_repo.delete_entries_for_task(drop.id) == 0
    assert [e.task_id for e in await schedule_repo.entries_for_date(MONDAY)] == [keep.id]


@pytest.mark.asyncio
async def test_update_entry_patches_given_fields(schedule_repo, create_task):
    task = await create_task("Patch")
    created = await schedule_repo.insert_entry(entry_for(task.id, MONDAY, time(10, 0), time(11, 0)))

    updated = await schedule_repo.update_entry(
        created.id, ScheduleEntryUpdate(end_time=time(12, 0))
    )

    assert updated.start_time == time(10, 0)
    assert updated.end_time == time(12, 0)
    assert await schedule_repo.update_entry(999, ScheduleEntryUpdate(end_time=time(12, 0))) is None


@pytest.mark.asyncio
async def test_run_atomically_commits_all_writes(schedule_repo, create_task):
    task = await create_task("Atomic")

    async def _write(tx):
        await tx.insert_entry(entry_for(task.id, MONDAY, time(10, 0), time(11, 0)))
        await tx.insert_entry(entry_for(task.id, TUESDAY, time(10, 0), time(11, 0)))
        return "done"

    assert await schedule_repo.run_atomically(_write) == "done"
    assert len(await schedule_repo.entries_for_date_range(MONDAY, FRIDAY)) == 2


@pytest.mark.asyncio
async def test_run_atomically_rolls_back_on_storage_failure(schedule_repo, create_task):
    task = await create_task("Rollback")
    await schedule_repo.insert_entry(entry_for(task.id, MONDAY, time(10, 0), time(11, 0)))

    async def _write(tx):
        await tx.delete_entries_for_date_range(MONDAY, FRIDAY)
        await tx.insert_entry(entry_for(task.id, TUESDAY, time(10, 0), time(11, 0)))
        # Saturday violates the business-day CHECK constraint
        await tx.insert_entry(
            ScheduleEntryCreate.model_construct(
                task_id=task.id,
                day_of_week=6,
                start_time=time(10, 0),
                end_time=time(11, 0),
                scheduled_date=date(2024, 1, 13),
            )
        )

    with pytest.raises(StorageError):
        await schedule_repo.run_atomically(_write)

    entries = await schedule_repo.entries_for_date_range(MONDAY, date(2024, 1, 14))
    assert [(e.scheduled_date, e.start_time) for e in entries] == [(MONDAY, time(10, 0))]


@pytest.mark.asyncio
async def test_run_atomically_rolls_back_on_domain_error(schedule_repo, create_task):
    task = await create_task("Domain")
    await schedule_repo.insert_entry(entry_for(task.id, MONDAY, time(10, 0), time(11, 0)))

    async def _write(tx):
        await tx.delete_entries_for_task(task.id)
        raise ConflictError("slot taken", conflicting_entry_ids=[1])

    with pytest.raises(ConflictError):
        await schedule_repo.run_atomically(_write)

    assert len(await schedule_repo.entries_for_date(MONDAY)) == 1
