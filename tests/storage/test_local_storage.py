import logging
from pathlib import Path

import pytest

from concurrency_perf.reportgen.base import ReportFile
from concurrency_perf.storage import LocalStorageClient, SingleFileStorageClient


def sample_files() -> list[ReportFile]:
    return [
        ReportFile(name="report.csv", contents="Tasks,Task\n1,1\n"),
        ReportFile(name="report.json", contents={"observations": []}),
    ]


def test_local_storage_writes_every_file(tmp_path: Path) -> None:
    output_dir = tmp_path / "reports" / "run-1"
    LocalStorageClient(str(output_dir)).save_report(sample_files())

    assert (output_dir / "report.csv").read_text() == "Tasks,Task\n1,1\n"
    assert '"observations": []' in (output_dir / "report.json").read_text()


def test_local_storage_prefix(tmp_path: Path) -> None:
    LocalStorageClient(str(tmp_path), report_file_prefix="sweep-").save_report(sample_files())
    assert sorted(p.name for p in tmp_path.iterdir()) == ["sweep-report.csv", "sweep-report.json"]


def test_single_file_storage(tmp_path: Path) -> None:
    target = tmp_path / "out" / "profit.txt"
    SingleFileStorageClient(str(target)).save_report(sample_files())
    assert target.read_text() == "Tasks,Task\n1,1\n"


def test_single_file_storage_without_csv(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    target = tmp_path / "profit.txt"
    with caplog.at_level(logging.WARNING):
        SingleFileStorageClient(str(target)).save_report(sample_files()[1:])
    assert not target.exists()
    assert "nothing written" in caplog.text
