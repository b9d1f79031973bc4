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
from typing import List, Optional

from pydantic import BaseModel

from concurrency_perf.metrics.base import Schedule
from concurrency_perf.metrics.observed import Observation, reduce_schedule
from concurrency_perf.metrics.profit import BaselinePolicy, calculate_profit

logger = logging.getLogger(__name__)


class Report(BaseModel):
    """Observations of a sweep, ordered by increasing task count"""

    baseline_policy: BaselinePolicy = BaselinePolicy.FIRST
    observations: List[Observation] = []

    def count_observations(self) -> int:
        return len(self.observations)

    def get_observation(self, idx: int) -> Observation:
        return self.observations[idx]

    def baseline_duration(self) -> Optional[int]:
        if not self.observations:
            return None
        if self.baseline_policy == BaselinePolicy.MINIMUM:
            return min(obs.total_duration for obs in self.observations)
        return self.observations[0].total_duration

    def register_schedule(self, schedule: Schedule) -> Observation:
        return self.register_observation(reduce_schedule(schedule))

    def register_observation(self, observation: Observation) -> Observation:
        baseline = self.baseline_duration()
        if baseline is not None:
            observation.concurrency_profit = calculate_profit(observation, baseline)
        else:
            observation.concurrency_profit = 0.0
        logger.debug(
            f"Registered observation of {observation.task_count} tasks "
            f"(baseline={baseline}, profit={observation.concurrency_profit:.3f})"
        )
        self.observations.append(observation)
        return observation
