"""Configuration loading and centralized logging."""

import logging
from io import StringIO

import pytest

import config
from config import AppConfig, get_config, reset_config
from graph import Graph
from log import (
    ROOT_LOGGER_NAME,
    enable_debug_logging,
    get_logger,
    set_global_log_level,
    setup_root_logger,
)


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
def test_defaults():
    cfg = AppConfig.from_env({})
    assert cfg.host == "127.0.0.1"
    assert cfg.port == 5000
    assert cfg.debug is False
    assert cfg.log_level == "INFO"
    assert cfg.default_speed == "medium"
    assert len(cfg.secret_key) == 64


def test_env_overrides():
    cfg = AppConfig.from_env({
        "STEPPER_HOST": "0.0.0.0",
        "STEPPER_PORT": "8080",
        "STEPPER_DEBUG": "yes",
        "STEPPER_LOG_LEVEL": "debug",
        "STEPPER_SPEED": "Slow",
        "STEPPER_SECRET_KEY": "s3cret",
    })
    assert cfg.host == "0.0.0.0"
    assert cfg.port == 8080
    assert cfg.debug is True
    assert cfg.log_level == "DEBUG"
    assert cfg.default_speed == "slow"
    assert cfg.secret_key == "s3cret"


def test_debug_false_values():
    assert AppConfig.from_env({"STEPPER_DEBUG": "0"}).debug is False


def test_bad_port():
    with pytest.raises(ValueError, match="STEPPER_PORT"):
        AppConfig.from_env({"STEPPER_PORT": "http"})


def test_unknown_speed_is_rejected():
    with pytest.raises(ValueError, match="STEPPER_SPEED"):
        AppConfig.from_env({"STEPPER_SPEED": "warp"})


def test_max_runs():
    assert AppConfig.from_env({}).max_runs == 256
    assert AppConfig.from_env({"STEPPER_MAX_RUNS": "8"}).max_runs == 8
    with pytest.raises(ValueError, match="STEPPER_MAX_RUNS"):
        AppConfig.from_env({"STEPPER_MAX_RUNS": "0"})
    with pytest.raises(ValueError, match="STEPPER_MAX_RUNS"):
        AppConfig.from_env({"STEPPER_MAX_RUNS": "lots"})


def test_get_config_is_cached(monkeypatch):
    reset_config()
    monkeypatch.setenv("STEPPER_PORT", "9001")
    try:
        first = get_config()
        monkeypatch.setenv("STEPPER_PORT", "9002")
        assert get_config() is first
        assert first.port == 9001

        reset_config()
        assert config.get_config().port == 9002
    finally:
        reset_config()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
def test_logger_naming(clean_logging):
    assert get_logger("graph.graph").name == f"{ROOT_LOGGER_NAME}.graph.graph"
    assert get_logger(f"{ROOT_LOGGER_NAME}.x").name == f"{ROOT_LOGGER_NAME}.x"


def test_set_global_log_level(clean_logging):
    set_global_log_level("warning")
    assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.WARNING
    enable_debug_logging()
    assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.DEBUG


def test_unknown_level_name(clean_logging):
    with pytest.raises(ValueError):
        set_global_log_level("chatty")


def test_import_logs_through_root(clean_logging):
    capture = StringIO()
    setup_root_logger(level=logging.DEBUG, handler=logging.StreamHandler(capture))

    Graph.from_adjacency_list("A: B(1)\nB: A(1)")

    output = capture.getvalue()
    assert "Skipping mirrored edge" in output
    assert "Imported adjacency list" in output
    assert f"{ROOT_LOGGER_NAME}.graph.graph" in output


def test_setup_only_once(clean_logging):
    setup_root_logger()
    setup_root_logger()
    assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1
