import pytest
from pydantic import ValidationError

from concurrency_perf.metrics.base import ScheduleEntry
from concurrency_perf.metrics.observed import reduce_schedule


def test_schedule_entry_rejects_negative_duration() -> None:
    with pytest.raises(ValidationError):
        ScheduleEntry(started_at=0, duration=-1)


def test_reduce_single_task() -> None:
    observation = reduce_schedule([ScheduleEntry(started_at=123_456, duration=42)])

    assert observation.task_count == 1
    assert observation.standard_deviation == 0
    assert observation.mean_task_duration == 42
    assert observation.total_duration == 42
    assert observation.concurrency_profit == 0.0
    assert observation.schedule[0].started_at == 0


def test_reduce_overlapping_tasks() -> None:
    schedule = [
        ScheduleEntry(started_at=1_010, duration=120),
        ScheduleEntry(started_at=1_000, duration=100),
        ScheduleEntry(started_at=1_050, duration=80),
    ]

    observation = reduce_schedule(schedule)

    assert observation.task_count == 3
    # latest finish 1130, earliest start 1000
    assert observation.total_duration == 130
    assert observation.mean_task_duration == 100
    # sqrt(0 + 400 + 400) = 28.28 -> 28, divided by n - 1 = 2
    assert observation.standard_deviation == 14
    assert [entry.started_at for entry in observation.schedule] == [10, 0, 50]
    assert [entry.duration for entry in observation.schedule] == [120, 100, 80]


def test_mean_truncates() -> None:
    schedule = [ScheduleEntry(started_at=0, duration=10), ScheduleEntry(started_at=0, duration=11)]
    assert reduce_schedule(schedule).mean_task_duration == 10


def test_rebasing_leaves_source_schedule_untouched() -> None:
    schedule = [ScheduleEntry(started_at=500, duration=5), ScheduleEntry(started_at=505, duration=5)]
    observation = reduce_schedule(schedule)

    assert min(entry.started_at for entry in observation.schedule) == 0
    assert [entry.started_at for entry in schedule] == [500, 505]


def test_reduce_empty_schedule() -> None:
    with pytest.raises(ValueError):
        reduce_schedule([])


def test_summary_excludes_schedule() -> None:
    summary = reduce_schedule([ScheduleEntry(started_at=3, duration=4)]).get_summary()
    assert "schedule" not in summary
    assert summary["total_duration"] == 4
