import logging
from pathlib import Path

import pytest
import yaml
from structlog.testing import capture_logs

from goap.config import PlannerSettings, load_settings, load_toml_config, load_yaml_config

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


def test_shipped_settings_load():
    settings = load_settings(CONFIG_DIR / "settings.toml")
    assert settings.algorithm == "best_first"
    assert settings.reopen_closed is False
    assert settings.max_expansions == 10000
    assert settings.max_iterations == 64
    assert settings.logging_level == logging.INFO


def test_missing_settings_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "missing.toml")
    assert settings == PlannerSettings()
    assert settings.max_expansions is None


def test_zero_caps_disable_limits(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text('[planner]\nalgorithm = "ida_star"\nmax_expansions = 0\nmax_iterations = 0\n')
    settings = load_settings(path)
    assert settings.algorithm == "ida_star"
    assert settings.max_expansions is None
    assert settings.max_iterations is None


def test_unknown_keys_are_ignored(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text("[planner]\nreopen_closed = true\nbogus = 3\n")
    settings = load_settings(path)
    assert settings.reopen_closed is True


def test_unknown_algorithm_is_rejected():
    with pytest.raises(ValueError):
        PlannerSettings(algorithm="dijkstra")


def test_invalid_toml_returns_empty(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("[planner\n")
    assert load_toml_config(path, "Broken") == {}
    assert load_settings(path) == PlannerSettings()


def test_yaml_loader(tmp_path):
    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    assert load_yaml_config(empty, "Empty") == {}

    broken = tmp_path / "broken.yaml"
    broken.write_text("dimensions: [a, b\n")
    with pytest.raises(yaml.YAMLError):
        load_yaml_config(broken, "Broken")

    with pytest.raises(FileNotFoundError):
        load_yaml_config(tmp_path / "missing.yaml", "Missing")


def test_settings_loader_logs_fallback_reason(tmp_path):
    with capture_logs() as logs:
        assert load_toml_config(tmp_path / "missing.toml", "Planner settings") == {}
    assert any(
        log["event"] == "Settings file missing, using planner defaults"
        and log["config"] == "Planner settings"
        for log in logs
    )

    broken = tmp_path / "broken.toml"
    broken.write_text("[planner\n")
    with capture_logs() as logs:
        load_toml_config(broken, "Planner settings")
    assert any(log["event"] == "Settings file is not valid TOML, using planner defaults" for log in logs)


def test_catalog_loader_logs_before_raising(tmp_path):
    with capture_logs() as logs:
        with pytest.raises(FileNotFoundError):
            load_yaml_config(tmp_path / "missing.yaml", "Action catalog")
    assert any(log["event"] == "Catalog file not found" and log["log_level"] == "error" for log in logs)
