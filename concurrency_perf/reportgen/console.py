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
from concurrency_perf.metrics.observed import Observation

SYSPARAMS_RULE = "=" * 36
PROFIT_RULE = "=" * 60
PROFIT_SEPARATOR = "-" * 60


def format_salutation() -> str:
    return "Testing concurrent code execution on Python\n"


def format_sysparams(n_cpus: int, cycles_per_sec: int) -> str:
    return "\n".join(
        [
            SYSPARAMS_RULE,
            "System parameter               Value",
            SYSPARAMS_RULE,
            f"CPUs available {n_cpus:21d}",
            f"Cycles per second {cycles_per_sec:18d}",
            SYSPARAMS_RULE,
        ]
    )


def format_profit_header() -> str:
    return "\n".join([PROFIT_RULE, "Tasks  Mean task duration  Std. dev.  Total duration  Profit", PROFIT_RULE])


def format_profit_entry(obs: Observation) -> str:
    return (
        f"{obs.task_count:5d} {obs.mean_task_duration:19d} {obs.standard_deviation:10d} "
        f"{obs.total_duration:15d} {obs.concurrency_profit * 100.0:6.0f}%"
    )


def format_profit_footer() -> str:
    return PROFIT_RULE


def needs_separator(task_count: int, tasks_max: int, n_cpus: int) -> bool:
    """Rows are grouped by multiples of the processor count"""
    return task_count % n_cpus == 0 and task_count != tasks_max


def format_help(prog: str = "concurrency-perf") -> str:
    return "\n".join(
        [
            "Commands and arguments",
            "Displaying system parameters:",
            f"  {prog} sysparams",
            "Measuring profits of concurrency:",
            f"  {prog} profit <Number of tasks> <Cycles in a task> <Tasks in a series> [Output file]",
            "Charting a saved JSON report:",
            f"  {prog} analyze <Report directory>",
        ]
    )
