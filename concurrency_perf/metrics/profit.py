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
from enum import Enum

from concurrency_perf.metrics.observed import Observation

logger = logging.getLogger(__name__)


class BaselinePolicy(Enum):
    # total duration of the first (single task) observation of the sweep
    FIRST = "first"
    # smallest total duration among the observations recorded so far
    MINIMUM = "minimum"


def calculate_profit(observation: Observation, baseline_duration: int) -> float:
    """Fraction of the extrapolated serial duration saved by running the tasks concurrently"""
    expected_serial_duration = observation.task_count * baseline_duration
    if expected_serial_duration <= 0:
        logger.warning(
            f"Baseline duration of {baseline_duration} ms leaves no serial duration to compare "
            f"{observation.task_count} tasks against, reporting zero profit"
        )
        return 0.0
    return 1.0 - observation.total_duration / expected_serial_duration
