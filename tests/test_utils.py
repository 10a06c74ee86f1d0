import logging
import time

import pytest

from src.utils.config import DEFAULT_CONFIG, get, load_config, load_yaml, merge
from src.utils.logger import setup_logger
from src.utils.timing import StageTimer


def test_load_yaml_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_yaml(tmp_path / "nope.yaml")


def test_load_config_merges_defaults(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("tracking:\n  critical_time_s: 1.5\n", encoding="utf-8")
    cfg = load_config(path)
    assert get(cfg, "tracking.critical_time_s") == 1.5
    assert get(cfg, "tracking.warning_time_s") == DEFAULT_CONFIG["tracking"]["warning_time_s"]
    assert get(cfg, "navigation.start.x") == 5


def test_load_yaml_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_yaml(path)


def test_get_dot_path_default():
    cfg = {"a": {"b": 1}}
    assert get(cfg, "a.b") == 1
    assert get(cfg, "a.c", "x") == "x"
    assert get(cfg, "a.b.c", None) is None


def test_merge_does_not_mutate_base():
    base = {"a": {"b": 1, "c": 2}}
    out = merge(base, {"a": {"b": 5}})
    assert out == {"a": {"b": 5, "c": 2}}
    assert base["a"]["b"] == 1


def test_setup_logger_writes_run_log(tmp_path):
    logger = setup_logger(name="aeb.test_run_log", log_dir=tmp_path, level="DEBUG")
    logger.debug("hello")
    for handler in logger.handlers:
        handler.flush()
    assert logger.level == logging.DEBUG
    assert "hello" in (tmp_path / "run.log").read_text(encoding="utf-8")
    # second call must not stack handlers
    assert len(setup_logger(name="aeb.test_run_log", log_dir=tmp_path).handlers) == 2


def test_stage_timer_records_stages():
    timer = StageTimer()
    with timer.stage("sort"):
        time.sleep(0.001)
    assert timer.stages_ms["sort"] > 0.0
    timer.stages_ms["fast"] = timer.stages_ms["sort"] / 2
    assert timer.speedup("sort", "fast") == pytest.approx(2.0)
    assert timer.speedup("sort", "missing") is None
