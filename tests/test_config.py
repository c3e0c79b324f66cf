"""Tests for configuration management."""

import json

import pytest
from pydantic import ValidationError

from tasklens.config import Config, ConfigManager, get_config_manager


def test_default_config():
    """Test default configuration."""
    config = Config()
    assert config.search.threshold == 0.4
    assert config.search.min_query_length == 2
    assert config.views.upcoming_days == 7
    assert config.output.format == "pretty"
    assert config.output.date_format == "{month}/{day}/{year}"
    assert config.data.tasks_file.endswith("tasks.json")


def test_config_dir_created(isolated_dirs):
    manager = ConfigManager(profile="test")
    assert manager.config_dir.is_dir()
    assert manager.config_file == isolated_dirs / "config" / "test.json"


def test_config_save_load():
    """Values survive a round trip through the profile file."""
    manager = ConfigManager(profile="test")
    manager.set("search.threshold", 0.25)
    assert manager.get("search.threshold") == 0.25

    assert ConfigManager(profile="test").get("search.threshold") == 0.25


def test_set_coerces_strings():
    manager = ConfigManager()
    manager.set("views.upcoming_days", "14")
    manager.set("search.threshold", "0.25")
    assert manager.get("views.upcoming_days") == 14
    assert manager.get("search.threshold") == 0.25


def test_set_unknown_key():
    with pytest.raises(KeyError):
        ConfigManager().set("search.fuzziness", 3)


def test_set_invalid_value_keeps_previous():
    manager = ConfigManager()
    with pytest.raises(ValidationError):
        manager.set("search.threshold", 5)
    assert manager.get("search.threshold") == 0.4


def test_get_missing_key():
    assert ConfigManager().get("nope.nothing") is None


def test_reset_single_key():
    manager = ConfigManager()
    manager.set("search.limit", 10)
    manager.reset("search.limit")
    assert manager.get("search.limit") == 50


def test_reset_all():
    manager = ConfigManager()
    manager.set("output.format", "json")
    manager.reset()
    assert ConfigManager().get("output.format") == "pretty"


def test_corrupted_file_falls_back_to_defaults():
    manager = ConfigManager()
    manager.config_file.write_text("{not json")
    assert manager.load_config() == Config()


def test_invalid_values_in_file_fall_back_to_defaults():
    manager = ConfigManager()
    manager.config_file.write_text(json.dumps({"search": {"threshold": "high"}}))
    assert manager.load_config() == Config()


def test_list_profiles():
    ConfigManager("work").save_config()
    ConfigManager("home").save_config()
    assert ConfigManager().list_profiles() == ["home", "work"]


def test_get_config_manager_is_cached_per_profile():
    assert get_config_manager() is get_config_manager()
    assert get_config_manager("other").profile == "other"
