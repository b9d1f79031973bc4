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
import os
from typing import Callable, Optional

from concurrency_perf.utils.clock import Clock

logger = logging.getLogger(__name__)

CALIBRATION_TARGET_MS = 1000


def count_cpus() -> int:
    return os.cpu_count() or 1


def count_cycles_per_sec(run_cycles: Callable[[int], object], clock: Optional[Clock] = None) -> int:
    """
    Estimates how many workload cycles this machine completes per second.

    The cycle count grows tenfold until a single run takes at least a second,
    so short runs never dominate the estimate.
    """
    clock = clock or Clock()
    duration = 0
    n_cycles = 1
    while duration < CALIBRATION_TARGET_MS:
        n_cycles *= 10
        start = clock.now()
        run_cycles(n_cycles)
        duration = clock.elapsed_millis(start)
        logger.debug(f"Calibration run of {n_cycles} cycles took {duration} ms")
    return CALIBRATION_TARGET_MS * n_cycles // duration
