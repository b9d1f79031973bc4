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
import re
import sys
from argparse import ArgumentParser, Namespace
from typing import Any, List, Optional

import yaml
from pydantic import ValidationError

from concurrency_perf.analysis import analyze_reports
from concurrency_perf.config import Config, build_config
from concurrency_perf.loadgen import BurstScheduler
from concurrency_perf.metrics import Report
from concurrency_perf.reportgen import ReportFile, ReportGenerator
from concurrency_perf.reportgen.console import (
    PROFIT_SEPARATOR,
    format_help,
    format_profit_entry,
    format_profit_footer,
    format_profit_header,
    format_salutation,
    format_sysparams,
    needs_separator,
)
from concurrency_perf.storage import LocalStorageClient, SingleFileStorageClient, StorageClient
from concurrency_perf.utils import count_cpus, count_cycles_per_sec
from concurrency_perf.workload import TripletWorkload, Workload, run_cycles

logger = logging.getLogger(__name__)

USIZE_PATTERN = re.compile(r"^\d+$")


class ConcurrencyPerfRunner:
    def __init__(
        self,
        config: Config,
        scheduler: BurstScheduler,
        reportgen: ReportGenerator,
        storage_clients: List[StorageClient],
        workload: Workload,
        n_cpus: int,
    ) -> None:
        self.config = config
        self.scheduler = scheduler
        self.reportgen = reportgen
        self.storage_clients = storage_clients
        self.workload = workload
        self.n_cpus = n_cpus

    def run(self) -> Report:
        sweep = self.config.sweep
        report = Report(baseline_policy=sweep.baseline)

        print(format_profit_header())
        for task_count in range(1, sweep.tasks_max + 1):
            schedule = self.scheduler.run_observation(task_count, sweep.series_size_for(task_count), self.workload)
            observation = report.register_schedule(schedule)
            print(format_profit_entry(observation))
            if needs_separator(task_count, sweep.tasks_max, self.n_cpus):
                print(PROFIT_SEPARATOR)
        print(format_profit_footer())

        return report

    def save_reports(self, reports: List[ReportFile]) -> None:
        for storage_client in self.storage_clients:
            storage_client.save_report(reports)


def parse_usize(value: Optional[str], name: str) -> Optional[int]:
    if value is None:
        return None
    if not USIZE_PATTERN.match(value):
        raise ValueError(f"{name} must be a non-negative integer, got '{value}'")
    return int(value)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="concurrency-perf", description="Observing concurrent code execution")
    parser.add_argument("-c", "--config_file", help="Config File")
    parser.add_argument("--log-level", default=None, help="Logging level")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("sysparams", help="Display system parameters")

    profit = subparsers.add_parser("profit", help="Measure profits of concurrency")
    profit.add_argument("tasks_max", nargs="?", help="Number of tasks")
    profit.add_argument("cycles", nargs="?", help="Cycles in a task")
    profit.add_argument("series_size", nargs="?", help="Tasks in a series")
    profit.add_argument("output_file", nargs="?", help="Output file")
    profit.add_argument("--executor", choices=["process", "thread"], default=None)
    profit.add_argument("--baseline", choices=["first", "minimum"], default=None)
    profit.add_argument("--output-dir", default=None, help="Directory to store every report file")
    profit.add_argument("--json", action="store_true", help="Also write report.json")

    analyze = subparsers.add_parser("analyze", help="Chart a saved JSON report")
    analyze.add_argument("report_dir", help="Directory containing report.json")
    return parser


def collect_overrides(args: Namespace) -> dict[str, Any]:
    sweep: dict[str, Any] = {}
    tasks_max = parse_usize(args.tasks_max, "Number of tasks")
    series_size = parse_usize(args.series_size, "Tasks in a series")
    cycles = parse_usize(args.cycles, "Cycles in a task")
    if tasks_max is not None:
        sweep["tasks_max"] = tasks_max
    if series_size is not None:
        sweep["series_size"] = series_size
    if args.executor:
        sweep["executor"] = args.executor
    if args.baseline:
        sweep["baseline"] = args.baseline

    overrides: dict[str, Any] = {"sweep": sweep}
    if cycles is not None:
        overrides["workload"] = {"cycles": cycles}
    storage: dict[str, Any] = {}
    if args.output_file:
        storage["output_file"] = args.output_file
    if args.output_dir:
        storage["path"] = args.output_dir
    if storage:
        overrides["storage"] = storage
    if args.json:
        overrides["report"] = {"json_report": True}
    if args.log_level:
        overrides["log_level"] = args.log_level
    return overrides


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run_sysparams() -> int:
    n_cpus = count_cpus()
    cycles_per_sec = count_cycles_per_sec(run_cycles)
    print(format_sysparams(n_cpus, cycles_per_sec))
    return 0


def run_profit(config: Config) -> int:
    storage_clients: List[StorageClient] = []
    if config.storage.output_file:
        storage_clients.append(SingleFileStorageClient(config.storage.output_file))
    if config.storage.path:
        storage_clients.append(LocalStorageClient(config.storage.path, config.storage.report_file_prefix))

    perfrunner = ConcurrencyPerfRunner(
        config=config,
        scheduler=BurstScheduler(config.sweep.executor),
        reportgen=ReportGenerator(config.report),
        storage_clients=storage_clients,
        workload=TripletWorkload(config.workload.cycles),
        n_cpus=count_cpus(),
    )
    report = perfrunner.run()

    if storage_clients:
        perfrunner.save_reports(perfrunner.reportgen.generate_reports(report))
    return 0


def main_cli(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    print(format_salutation())
    setup_logging(args.log_level or "INFO")

    if args.command == "sysparams":
        return run_sysparams()
    if args.command == "analyze":
        return 0 if analyze_reports(args.report_dir) else 1
    if args.command != "profit":
        print(format_help())
        return 1

    positional = (args.tasks_max, args.cycles, args.series_size)
    if args.config_file is None and any(value is None for value in positional):
        print(format_help())
        return 1

    try:
        config = build_config(collect_overrides(args), args.config_file)
    except (ValueError, ValidationError, OSError, yaml.YAMLError) as e:
        logger.error(f"Invalid arguments: {e}")
        print(format_help())
        return 1

    logging.getLogger().setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    return run_profit(config)


if __name__ == "__main__":
    sys.exit(main_cli())
