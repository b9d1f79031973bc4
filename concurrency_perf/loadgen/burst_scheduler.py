# Copyright 2025 The Kubernetes Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
import logging
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from enum import Enum
from typing import List

from concurrency_perf.loadgen.task_runner import run_task
from concurrency_perf.metrics.base import Schedule, ScheduleEntry
from concurrency_perf.workload import Workload

logger = logging.getLogger(__name__)


class ExecutorType(Enum):
    PROCESS = "process"
    THREAD = "thread"


def count_series(task_count: int, series_size: int) -> int:
    _check_partition(task_count, series_size)
    return -(-task_count // series_size)


def partition(task_count: int, series_size: int) -> List[int]:
    """Sizes of the consecutive series a burst of task_count tasks is split into"""
    n_series = count_series(task_count, series_size)
    return [min(series_size, task_count - idx * series_size) for idx in range(n_series)]


def _check_partition(task_count: int, series_size: int) -> None:
    if task_count < 1:
        raise ValueError(f"task_count must be at least 1, got {task_count}")
    if series_size < 1:
        raise ValueError(f"series_size must be at least 1, got {series_size}")
    if series_size > task_count:
        raise ValueError(f"series_size ({series_size}) must not exceed task_count ({task_count})")


class BurstScheduler:
    """
    Runs an observation as a sequence of concurrent series.

    Every task of a series is submitted at once and the scheduler waits for
    all of them before launching the next series, so at most series_size tasks
    are ever in flight. Tasks hand their ScheduleEntry back through their
    future; only this coordinator appends to the schedule.
    """

    def __init__(self, executor_type: ExecutorType = ExecutorType.PROCESS) -> None:
        self.executor_type = executor_type

    def _create_executor(self, max_workers: int) -> Executor:
        if self.executor_type == ExecutorType.THREAD:
            return ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="concurrency-perf-task")
        return ProcessPoolExecutor(max_workers=max_workers)

    def run_observation(self, task_count: int, series_size: int, workload: Workload) -> Schedule:
        series_sizes = partition(task_count, series_size)
        logger.debug(
            f"Observing {task_count} tasks in {len(series_sizes)} series of up to {series_size} "
            f"on {self.executor_type.value} executor"
        )
        schedule: Schedule = []
        with self._create_executor(series_size) as executor:
            for series_idx, size in enumerate(series_sizes):
                schedule.extend(self._run_series(executor, size, workload))
                logger.debug(f"Series {series_idx + 1}/{len(series_sizes)} joined ({size} tasks)")
        return schedule

    def _run_series(self, executor: Executor, size: int, workload: Workload) -> List[ScheduleEntry]:
        futures: List[Future[ScheduleEntry]] = [executor.submit(run_task, workload) for _ in range(size)]
        entries: List[ScheduleEntry] = []
        try:
            # Join barrier: as_completed is exhausted only once every task of the series has finished.
            for future in as_completed(futures):
                entries.append(future.result())
        except BaseException:
            for future in futures:
                future.cancel()
            raise
        return entries
