from pathlib import Path

import pytest
from pydantic import ValidationError

from concurrency_perf.config import Config, SweepConfig, build_config, deep_merge, load_config_file
from concurrency_perf.loadgen import ExecutorType
from concurrency_perf.metrics import BaselinePolicy


def test_defaults() -> None:
    config = Config()
    assert config.sweep.executor == ExecutorType.PROCESS
    assert config.sweep.baseline == BaselinePolicy.FIRST
    assert config.sweep.series_size is None
    assert config.report.totals and config.report.schedule
    assert config.storage.output_file is None


def test_series_size_must_not_exceed_tasks_max() -> None:
    with pytest.raises(ValidationError):
        SweepConfig(tasks_max=4, series_size=5)


@pytest.mark.parametrize("field", ["tasks_max", "series_size"])
def test_counts_must_be_positive(field: str) -> None:
    with pytest.raises(ValidationError):
        SweepConfig(**{field: 0})


def test_series_size_for_clamps_to_task_count() -> None:
    sweep = SweepConfig(tasks_max=10, series_size=4)
    assert [sweep.series_size_for(n) for n in (1, 3, 4, 10)] == [1, 3, 4, 4]
    assert SweepConfig(tasks_max=6).series_size_for(5) == 5


def test_deep_merge() -> None:
    base = {"sweep": {"tasks_max": 8, "executor": "process"}, "log_level": "INFO"}
    merged = deep_merge(base, {"sweep": {"tasks_max": 2}})
    assert merged == {"sweep": {"tasks_max": 2, "executor": "process"}, "log_level": "INFO"}
    assert base["sweep"]["tasks_max"] == 8


def test_build_config_from_file_and_overrides(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yml"
    config_file.write_text(
        "sweep:\n  tasks_max: 16\n  series_size: 4\n  baseline: minimum\nworkload:\n  cycles: 500\n"
    )

    config = build_config({"sweep": {"executor": "thread"}}, str(config_file))

    assert config.sweep.tasks_max == 16
    assert config.sweep.series_size == 4
    assert config.sweep.baseline == BaselinePolicy.MINIMUM
    assert config.sweep.executor == ExecutorType.THREAD
    assert config.workload.cycles == 500


def test_build_config_overrides_win(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yml"
    config_file.write_text("workload:\n  cycles: 500\n")
    config = build_config({"workload": {"cycles": 7}}, str(config_file))
    assert config.workload.cycles == 7


def test_build_config_empty_file(tmp_path: Path) -> None:
    config_file = tmp_path / "empty.yml"
    config_file.write_text("")
    assert build_config(config_file=str(config_file)) == Config()


def test_load_config_file_rejects_non_mapping(tmp_path: Path) -> None:
    config_file = tmp_path / "list.yml"
    config_file.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError, match="mapping"):
        load_config_file(str(config_file))
