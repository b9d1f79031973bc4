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
from pathlib import Path
from typing import List, Optional

from concurrency_perf.reportgen.base import ReportFile
from concurrency_perf.storage.base import StorageClient

logger = logging.getLogger(__name__)


class LocalStorageClient(StorageClient):
    """Writes every report file into a local directory"""

    def __init__(self, path: str, report_file_prefix: Optional[str] = None) -> None:
        self.output_dir = Path(path)
        self.report_file_prefix = report_file_prefix

    def save_report(self, reports: List[ReportFile]) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        for report in reports:
            filename = report.get_filename()
            if self.report_file_prefix:
                filename = f"{self.report_file_prefix}{filename}"
            target = self.output_dir / filename
            with open(target, "w", encoding="utf-8") as f:
                f.write(report.to_text())
            logger.info(f"Report saved to {target}")


class SingleFileStorageClient(StorageClient):
    """Writes the delimited report into one explicitly named file"""

    def __init__(self, output_file: str, report_name: str = "report.csv") -> None:
        self.output_file = Path(output_file)
        self.report_name = report_name

    def save_report(self, reports: List[ReportFile]) -> None:
        for report in reports:
            if report.get_filename() != self.report_name:
                continue
            self.output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.output_file, "w", encoding="utf-8") as f:
                f.write(report.to_text())
            logger.info(f"Report saved to {self.output_file}")
            return
        logger.warning(f"No {self.report_name} was generated, nothing written to {self.output_file}")
