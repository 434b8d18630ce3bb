"""Tests for procin.config."""

import json

import pytest

from procin.config import ReaderConfig
from procin.errors import ConfigurationError


def test_defaults():
    config = ReaderConfig()
    assert config.strategy == "auto"
    assert config.log_level == "WARNING"


def test_frozen():
    with pytest.raises(AttributeError):
        ReaderConfig().strategy = "line"


def test_invalid_strategy():
    with pytest.raises(ConfigurationError, match="unknown source strategy"):
        ReaderConfig(strategy="mmap")


def test_from_env():
    config = ReaderConfig.from_env({"PROCIN_STRATEGY": "line", "PROCIN_LOG_LEVEL": "debug"})
    assert config == ReaderConfig(strategy="line", log_level="DEBUG")


def test_from_env_defaults():
    assert ReaderConfig.from_env({}) == ReaderConfig()


def test_from_json_file(tmp_path):
    path = tmp_path / "procin.json"
    path.write_text(json.dumps({"strategy": "once"}), encoding="utf-8")
    assert ReaderConfig.from_json_file(str(path)).strategy == "once"


def test_from_json_file_unknown_key(tmp_path):
    path = tmp_path / "procin.json"
    path.write_text(json.dumps({"buffer": 10}), encoding="utf-8")
    with pytest.raises(ConfigurationError, match="invalid config file"):
        ReaderConfig.from_json_file(str(path))
