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
from typing import Any, List

import numpy as np
from pydantic import BaseModel

from concurrency_perf.metrics.base import Schedule, ScheduleEntry

logger = logging.getLogger(__name__)


class Observation(BaseModel):
    """Reduced statistics of one burst of tasks together with its rebased schedule"""

    task_count: int
    total_duration: int
    mean_task_duration: int
    standard_deviation: int
    concurrency_profit: float = 0.0
    schedule: List[ScheduleEntry]

    def get_summary(self) -> dict[str, Any]:
        return self.model_dump(exclude={"schedule"})


def standard_deviation(durations: np.ndarray, mean: int) -> int:
    task_count = len(durations)
    if task_count <= 1:
        return 0
    dispersion = int(np.sum((mean - durations) ** 2))
    return int(np.sqrt(dispersion)) // (task_count - 1)


def reduce_schedule(schedule: Schedule) -> Observation:
    """
    Reduces a completed schedule into an Observation.

    All aggregates are taken from the absolute timestamps first; only then are
    the entries moved onto a time axis starting at the earliest start.
    """
    if not schedule:
        raise ValueError("cannot reduce an empty schedule")

    starts = np.array([entry.started_at for entry in schedule], dtype=np.int64)
    finishes = np.array([entry.finished_at for entry in schedule], dtype=np.int64)
    durations = np.array([entry.duration for entry in schedule], dtype=np.int64)
    task_count = len(schedule)

    earliest_start = int(np.min(starts))
    latest_finish = int(np.max(finishes))
    total_duration = latest_finish - earliest_start
    sum_duration = int(np.sum(durations))
    mean_task_duration = sum_duration // task_count
    std_dev = standard_deviation(durations, mean_task_duration)

    rebased = [entry.rebased(earliest_start) for entry in schedule]

    logger.debug(
        f"Reduced {task_count} tasks: total={total_duration} ms, mean={mean_task_duration} ms, std_dev={std_dev} ms"
    )
    return Observation(
        task_count=task_count,
        total_duration=total_duration,
        mean_task_duration=mean_task_duration,
        standard_deviation=std_dev,
        schedule=rebased,
    )
