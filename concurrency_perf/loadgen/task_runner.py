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
from typing import Optional

from concurrency_perf.metrics.base import ScheduleEntry
from concurrency_perf.utils.clock import Clock
from concurrency_perf.workload import Workload


def run_task(workload: Workload, clock: Optional[Clock] = None) -> ScheduleEntry:
    """Runs the workload once on the calling thread and times it"""
    clock = clock or Clock()
    start = clock.now()
    try:
        workload()
    finally:
        finish = clock.now()
    duration = clock.millis_between(start, finish)
    return ScheduleEntry(started_at=clock.absolute_millis(start), duration=duration)
