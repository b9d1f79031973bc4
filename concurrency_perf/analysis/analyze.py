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
from pathlib import Path
from typing import Any, Dict, List, Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

logger = logging.getLogger(__name__)


def _load_observations(report_file: Path) -> List[Dict[str, Any]]:
    with open(report_file, "r") as f:
        report_data = json.load(f)
    if not isinstance(report_data, dict):
        raise ValueError(f"{report_file.name} must contain a JSON object, got {type(report_data).__name__}")
    observations = report_data.get("observations")
    if not isinstance(observations, list):
        raise ValueError(f"{report_file.name} has no observations list")
    return observations


def _render_profit_chart(observations: List[Dict[str, Any]], chart_path: Path) -> None:
    data = sorted((obs["task_count"], obs["concurrency_profit"] * 100.0) for obs in observations)

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot([x[0] for x in data], [x[1] for x in data], marker="o", linestyle="-")
    ax.axhline(0.0, color="grey", linewidth=0.8)
    ax.set_title("Concurrency Profit vs. Tasks")
    ax.set_xlabel("Tasks")
    ax.set_ylabel("Profit (%)")
    ax.grid(True)
    fig.tight_layout()
    fig.savefig(chart_path)
    plt.close(fig)
    logger.info(f"Chart saved to {chart_path}")


def _render_schedule_chart(observation: Dict[str, Any], chart_path: Path) -> None:
    schedule = observation.get("schedule", [])
    task_count = observation["task_count"]

    fig, ax = plt.subplots(figsize=(10, max(3, 0.3 * len(schedule) + 1)))
    ax.barh(
        range(1, len(schedule) + 1),
        [entry["duration"] for entry in schedule],
        left=[entry["started_at"] for entry in schedule],
        height=0.6,
    )
    ax.set_title(f"Schedule of {task_count} Tasks")
    ax.set_xlabel("Time since earliest start (ms)")
    ax.set_ylabel("Task")
    ax.invert_yaxis()
    ax.grid(True, axis="x")
    fig.tight_layout()
    fig.savefig(chart_path)
    plt.close(fig)
    logger.info(f"Chart saved to {chart_path}")


def analyze_reports(report_dir: str, report_name: str = "report.json") -> Optional[List[Path]]:
    """
    Renders charts for a JSON report saved by a profit sweep.

    Args:
        report_dir: The directory containing the report file.
        report_name: File name of the JSON report inside report_dir.

    Returns:
        The chart paths written, or None when there was nothing to chart.
    """
    logger.info(f"Analyzing reports in {report_dir}")
    report_path = Path(report_dir)
    report_file = report_path / report_name
    if not report_file.exists():
        logger.error(f"No report file {report_name} found in {report_dir}")
        return None

    try:
        observations = _load_observations(report_file)
    except json.JSONDecodeError:
        logger.error(f"Error decoding JSON from {report_file.name}")
        return None
    except ValueError as e:
        logger.error(str(e))
        return None

    if not observations:
        logger.error("No observations collected to generate any charts.")
        return None

    profit_chart = report_path / "profit_vs_tasks.png"
    schedule_chart = report_path / "schedule.png"
    try:
        _render_profit_chart(observations, profit_chart)
        largest = max(observations, key=lambda obs: obs["task_count"])
        _render_schedule_chart(largest, schedule_chart)
    except (KeyError, TypeError) as e:
        plt.close("all")
        logger.error(f"Malformed observation in {report_file.name}: {e!r}")
        return None

    return [profit_chart, schedule_chart]
