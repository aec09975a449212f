"""
Test the JSON configuration manager.
"""

import json
import logging

import pytest

from dom_kernel.utils.config import DEFAULTS, Config, get_default_config_path


def test_defaults_without_path():
    config = Config()
    assert config.get("events.raise_handler_errors") is True
    assert config.get("selectors.cache_size") == 128
    assert config.get("logging.console_level") == "WARNING"
    assert config.get_all() == DEFAULTS


def test_missing_key_returns_default():
    config = Config()
    assert config.get("nope") is None
    assert config.get("events.nope", 5) == 5
    assert config.get("events.raise_handler_errors.deeper", "d") == "d"


def test_missing_file_uses_defaults(tmp_path):
    config = Config(str(tmp_path / "absent.json"))
    assert config.get_all() == DEFAULTS


def test_file_is_merged_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"parser": {"keep_whitespace": False}, "custom": {"a": 1}}))
    config = Config(str(path))
    assert config.get("parser.keep_whitespace") is False
    assert config.get("custom.a") == 1
    assert config.get("events.raise_handler_errors") is True


def test_invalid_json_is_ignored(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with caplog.at_level(logging.ERROR, logger="dom_kernel"):
        config = Config(str(path))
    assert config.get_all() == DEFAULTS
    assert "Error loading configuration" in caplog.text


def test_non_object_json_is_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]")
    assert Config(str(path)).get_all() == DEFAULTS


def test_set_get_remove():
    config = Config()
    config.set("a.b.c", 3)
    assert config.get("a.b.c") == 3
    assert config.get("a.b") == {"c": 3}
    assert config.remove("a.b.c") is True
    assert config.remove("a.b.c") is False
    assert config.remove("x.y") is False


def test_set_replaces_scalar_parent():
    config = Config()
    config.set("parser.keep_whitespace.strict", True)
    assert config.get("parser.keep_whitespace") == {"strict": True}


def test_get_all_is_a_copy():
    config = Config()
    snapshot = config.get_all()
    snapshot["events"]["raise_handler_errors"] = False
    assert config.get("events.raise_handler_errors") is True


def test_defaults_are_not_shared():
    first = Config()
    first.set("selectors.cache_size", 1)
    assert Config().get("selectors.cache_size") == 128


def test_save_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.json"
    config = Config(str(path))
    config.set("logging.console_level", "DEBUG")
    config.save()
    assert json.loads(path.read_text())["logging"]["console_level"] == "DEBUG"
    assert Config(str(path)).get("logging.console_level") == "DEBUG"


def test_save_without_path():
    with pytest.raises(ValueError):
        Config().save()


def test_default_config_path(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert get_default_config_path() == str(tmp_path / ".dom_kernel" / "config.json")
