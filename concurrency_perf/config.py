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
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, model_validator

from concurrency_perf.loadgen.burst_scheduler import ExecutorType
from concurrency_perf.metrics.profit import BaselinePolicy

logger = logging.getLogger(__name__)


class WorkloadConfig(BaseModel):
    # Steps of the triplet recurrence performed by a single task
    cycles: int = Field(default=1_000_000, gt=0)


class SweepConfig(BaseModel):
    tasks_max: int = Field(default=8, gt=0)
    # Concurrent tasks per series, defaults to tasks_max (a single series per observation)
    series_size: Optional[int] = Field(default=None, gt=0)
    executor: ExecutorType = ExecutorType.PROCESS
    baseline: BaselinePolicy = BaselinePolicy.FIRST

    @model_validator(mode="after")
    def check_series_size(self) -> "SweepConfig":
        if self.series_size is not None and self.series_size > self.tasks_max:
            raise ValueError(f"series_size ({self.series_size}) must not exceed tasks_max ({self.tasks_max})")
        return self

    def series_size_for(self, task_count: int) -> int:
        return min(self.series_size or self.tasks_max, task_count)


class ReportConfig(BaseModel):
    totals: bool = True
    schedule: bool = True
    json_report: bool = False


class StorageConfig(BaseModel):
    # Explicit file receiving the delimited report
    output_file: Optional[str] = None
    # Directory receiving every generated report file
    path: Optional[str] = None
    report_file_prefix: Optional[str] = None


class Config(BaseModel):
    sweep: SweepConfig = SweepConfig()
    workload: WorkloadConfig = WorkloadConfig()
    report: ReportConfig = ReportConfig()
    storage: StorageConfig = StorageConfig()
    log_level: str = "INFO"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def load_config_file(config_file: str) -> dict[str, Any]:
    logger.info(f"Using configuration from: {config_file}")
    with open(config_file, "r") as stream:
        cfg = yaml.safe_load(stream)
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{config_file} must contain a mapping at the top level, got {type(cfg).__name__}")
    return cfg


def build_config(overrides: Optional[dict[str, Any]] = None, config_file: Optional[str] = None) -> Config:
    """
    Builds the run configuration from defaults, an optional YAML file and
    command line overrides, in increasing order of precedence.
    """
    merged = Config().model_dump(mode="json")
    if config_file:
        merged = deep_merge(merged, load_config_file(config_file))
    if overrides:
        merged = deep_merge(merged, overrides)
    config = Config(**merged)
    logger.info(
        f"Benchmarking with the following config:\n\n"
        f"{yaml.dump(config.model_dump(mode='json'), sort_keys=False, default_flow_style=False)}"
    )
    return config
