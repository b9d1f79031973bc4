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
import time
from typing import Callable, Optional

NANOS_PER_MILLI = 1_000_000


class TimingUnavailable(RuntimeError):
    """Raised when the monotonic clock cannot produce a valid reading.

    Timing samples are the whole point of an observation, so this error is
    fatal: it is never retried and aborts the observation that hit it.
    """


class Clock:
    """Millisecond view over a monotonic time source.

    Instants are opaque integers in nanoseconds. The default source is
    ``time.monotonic_ns``, which is system-wide on the supported platforms, so
    absolute values taken in worker processes are comparable with each other.
    """

    def __init__(self, source: Optional[Callable[[], int]] = None) -> None:
        self._source = source if source is not None else time.monotonic_ns

    def now(self) -> int:
        try:
            instant = self._source()
        except OSError as e:
            raise TimingUnavailable(f"monotonic clock read failed: {e}") from e
        if instant < 0:
            raise TimingUnavailable(f"monotonic clock returned a negative reading: {instant}")
        return instant

    def absolute_millis(self, instant: int) -> int:
        if instant < 0:
            raise TimingUnavailable(f"cannot convert negative instant {instant} to milliseconds")
        return instant // NANOS_PER_MILLI

    def elapsed_millis(self, since: int) -> int:
        return self.millis_between(since, self.now())

    def millis_between(self, start: int, finish: int) -> int:
        if finish < start:
            raise TimingUnavailable(f"monotonic clock went backwards by {start - finish} ns")
        return self.absolute_millis(finish) - self.absolute_millis(start)
