import pytest
from unittest.mock import MagicMock

from concurrency_perf.loadgen.task_runner import run_task
from concurrency_perf.utils.clock import Clock, TimingUnavailable

MS = 1_000_000


def test_run_task_records_start_and_duration() -> None:
    clock = Clock(source=MagicMock(side_effect=[5_000 * MS, 5_007 * MS]))
    workload = MagicMock()

    entry = run_task(workload, clock=clock)

    workload.assert_called_once_with()
    assert entry.started_at == 5_000
    assert entry.duration == 7
    assert entry.finished_at == 5_007


def test_run_task_propagates_workload_failure() -> None:
    workload = MagicMock(side_effect=ZeroDivisionError("boom"))
    with pytest.raises(ZeroDivisionError):
        run_task(workload)
    workload.assert_called_once_with()


def test_run_task_clock_failure() -> None:
    clock = Clock(source=MagicMock(side_effect=[5_000 * MS, 4_000 * MS]))
    with pytest.raises(TimingUnavailable):
        run_task(MagicMock(), clock=clock)


def test_run_task_default_clock() -> None:
    entry = run_task(lambda: sum(range(1000)))
    assert entry.duration >= 0
    assert entry.finished_at >= entry.started_at


def test_run_task_reads_clock_after_failed_workload() -> None:
    source = MagicMock(side_effect=[5_000 * MS, 5_003 * MS])
    workload = MagicMock(side_effect=RuntimeError("boom"))

    with pytest.raises(RuntimeError):
        run_task(workload, clock=Clock(source=source))

    assert source.call_count == 2
