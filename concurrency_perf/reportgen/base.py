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
import json
import logging
from typing import Any, List, Union

from concurrency_perf.config import ReportConfig
from concurrency_perf.metrics.observed import Observation
from concurrency_perf.metrics.report import Report

logger = logging.getLogger(__name__)

TOTALS_HEADER = "Tasks,Mean task duration,Std. dev.,Total duration,Profit"
SCHEDULE_HEADER = "Tasks,Task,Started,Finished,Duration"


class ReportFile:
    name: str
    contents: Union[str, dict[str, Any]]

    def __init__(self, name: str, contents: Union[str, dict[str, Any]]):
        self.name = name
        self.contents = contents

    def get_filename(self) -> str:
        return self.name

    def get_contents(self) -> Union[str, dict[str, Any]]:
        return self.contents

    def to_text(self) -> str:
        if isinstance(self.contents, str):
            return self.contents
        return json.dumps(self.contents, indent=2)


def format_observation_totals(obs: Observation) -> str:
    return (
        f"{obs.task_count},{obs.mean_task_duration},{obs.standard_deviation},"
        f"{obs.total_duration},{obs.concurrency_profit * 100.0:f}%"
    )


def format_totals_section(report: Report) -> str:
    lines = [TOTALS_HEADER] + [format_observation_totals(obs) for obs in report.observations]
    return "\n".join(lines) + "\n"


def format_schedule(obs: Observation) -> List[str]:
    return [
        f"{obs.task_count},{task_idx},{entry.started_at},{entry.finished_at},{entry.duration}"
        for task_idx, entry in enumerate(obs.schedule, start=1)
    ]


def format_schedule_section(report: Report) -> str:
    lines = [SCHEDULE_HEADER]
    for obs in report.observations:
        lines.extend(format_schedule(obs))
    return "\n".join(lines) + "\n"


class ReportGenerator:
    def __init__(self, config: ReportConfig) -> None:
        self.config = config

    def format_report(self, report: Report) -> str:
        sections = []
        if self.config.totals:
            sections.append(format_totals_section(report))
        if self.config.schedule:
            sections.append(format_schedule_section(report))
        return "\n".join(sections)

    def generate_reports(self, report: Report) -> List[ReportFile]:
        logger.info(f"Generating report according to config {self.config.model_dump_json()}")
        if report.count_observations() == 0:
            logger.info("Report has no observations, skipping report generation")
            return []

        reports: List[ReportFile] = []
        text = self.format_report(report)
        if text:
            reports.append(ReportFile(name="report.csv", contents=text))
        else:
            logger.info("Both delimited sections are disabled, not writing report.csv")
        if self.config.json_report:
            reports.append(ReportFile(name="report.json", contents=report.model_dump(mode="json")))
        return reports
