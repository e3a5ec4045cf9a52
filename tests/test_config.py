import json
import os

import pytest

from code_scorer import config


def _write_settings(data_dir, payload):
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "settings.json").write_text(payload, encoding="utf-8")


def test_api_key_unset_by_default():
    assert config.get_api_key() is None


def test_api_key_from_environment(monkeypatch):
    monkeypatch.setenv("CODE_SCORER_API_KEY", "sk-env")
    assert config.get_api_key() == "sk-env"


def test_empty_environment_value_is_kept(monkeypatch, isolated_settings):
    _write_settings(isolated_settings, json.dumps({"codeScorer.apiKey": "sk-file"}))
    monkeypatch.setenv("CODE_SCORER_API_KEY", "")
    assert config.get_api_key() == ""


def test_api_key_from_settings_file(isolated_settings):
    _write_settings(isolated_settings, json.dumps({"codeScorer.apiKey": "sk-file"}))
    assert config.get_api_key() == "sk-file"


def test_api_key_is_read_fresh_each_time(isolated_settings):
    _write_settings(isolated_settings, json.dumps({"codeScorer.apiKey": "sk-one"}))
    assert config.get_api_key() == "sk-one"
    _write_settings(isolated_settings, json.dumps({"codeScorer.apiKey": "sk-two"}))
    assert config.get_api_key() == "sk-two"


@pytest.mark.parametrize("payload", ["{not json", "[1, 2]"])
def test_invalid_settings_file_means_no_key(isolated_settings, payload, caplog):
    _write_settings(isolated_settings, payload)
    assert config.get_api_key() is None
    assert "settings file" in caplog.text


def test_poll_interval(monkeypatch):
    assert config.get_poll_interval() == config.DEFAULT_POLL_INTERVAL_SECONDS
    monkeypatch.setenv("CODE_SCORER_POLL_INTERVAL", "0.25")
    assert config.get_poll_interval() == 0.25


@pytest.mark.parametrize("value", ["soon", "0", "-1"])
def test_invalid_poll_interval(monkeypatch, value):
    monkeypatch.setenv("CODE_SCORER_POLL_INTERVAL", value)
    with pytest.raises(ValueError, match="CODE_SCORER_POLL_INTERVAL"):
        config.get_poll_interval()


def test_watch_paths(monkeypatch, tmp_path):
    assert config.get_watch_paths() == []
    a, b = tmp_path / "a", tmp_path / "b"
    monkeypatch.setenv("CODE_SCORER_WATCH_PATHS", f"{a}{os.pathsep}{b}{os.pathsep}")
    assert config.get_watch_paths() == [a, b]
