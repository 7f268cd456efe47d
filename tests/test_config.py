"""Tests for settings resolution and user overrides."""

import pytest

from calisthenics_tracker.core.config import CHECK_INTERVAL_SECONDS, DATA_DIR_ENVVAR, TRIGGER_HOUR
from calisthenics_tracker.core.config_loader import get_data_dir, load_settings


def test_defaults_without_override_file(tmp_path):
    settings = load_settings(tmp_path)
    assert settings.data_dir == tmp_path
    assert settings.trigger_hour == TRIGGER_HOUR
    assert settings.check_interval_seconds == CHECK_INTERVAL_SECONDS


def test_override_file(tmp_path):
    (tmp_path / "config.yaml").write_text("trigger_hour: 5\ncheck_interval_seconds: 15\n")
    settings = load_settings(tmp_path)
    assert settings.trigger_hour == 5
    assert settings.check_interval_seconds == 15.0


@pytest.mark.parametrize("value", ["25", "-1", "four", "true"])
def test_invalid_trigger_hour_warns(tmp_path, value):
    (tmp_path / "config.yaml").write_text(f"trigger_hour: {value}\n")
    with pytest.warns(UserWarning, match="trigger_hour"):
        settings = load_settings(tmp_path)
    assert settings.trigger_hour == TRIGGER_HOUR


def test_unparseable_file_warns(tmp_path):
    (tmp_path / "config.yaml").write_text("trigger_hour: [unclosed\n")
    with pytest.warns(UserWarning, match="ignoring"):
        settings = load_settings(tmp_path)
    assert settings.trigger_hour == TRIGGER_HOUR


def test_empty_file_uses_defaults(tmp_path):
    (tmp_path / "config.yaml").write_text("")
    assert load_settings(tmp_path).trigger_hour == TRIGGER_HOUR


def test_data_dir_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(DATA_DIR_ENVVAR, str(tmp_path / "elsewhere"))
    assert get_data_dir() == tmp_path / "elsewhere"
    assert get_data_dir(tmp_path) == tmp_path
