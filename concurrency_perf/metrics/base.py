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
from typing import List

from pydantic import BaseModel, Field


class ScheduleEntry(BaseModel):
    """Timing record of a single task, in integer milliseconds"""

    started_at: int
    duration: int = Field(ge=0)

    @property
    def finished_at(self) -> int:
        return self.started_at + self.duration

    def rebased(self, origin: int) -> "ScheduleEntry":
        return ScheduleEntry(started_at=self.started_at - origin, duration=self.duration)


# One entry per task of an observation, in join order
Schedule = List[ScheduleEntry]
