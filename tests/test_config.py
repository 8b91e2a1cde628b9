"""Tests for layered configuration loading."""

import json
import logging

from registered_attributes import config as config_module
from registered_attributes.config import (
    AttributesConfig,
    RegistrationConfig,
    configure,
    get_config,
    parse_bool,
    reset_config,
)


def _point_config_at(monkeypatch, tmp_path):
    config_file = tmp_path / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", tmp_path)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    monkeypatch.delenv("REGISTERED_ATTRIBUTES_UNKNOWN_OPTIONS", raising=False)
    monkeypatch.delenv("REGISTERED_ATTRIBUTES_STRIP_WHITESPACE", raising=False)
    return config_file


class TestLoad:
    def test_defaults(self, monkeypatch, tmp_path):
        _point_config_at(monkeypatch, tmp_path)
        config = AttributesConfig.load()
        assert config.registration.unknown_options == "reject"
        assert config.strip_whitespace is True
        assert config.reject_unknown_options

    def test_file_values(self, monkeypatch, tmp_path):
        config_file = _point_config_at(monkeypatch, tmp_path)
        config_file.write_text(
            json.dumps({"registration": {"unknown_options": "ignore", "strip_whitespace": False}})
        )
        config = AttributesConfig.load()
        assert config.registration.unknown_options == "ignore"
        assert config.strip_whitespace is False

    def test_env_overrides_file(self, monkeypatch, tmp_path):
        config_file = _point_config_at(monkeypatch, tmp_path)
        config_file.write_text(json.dumps({"registration": {"unknown_options": "ignore"}}))
        monkeypatch.setenv("REGISTERED_ATTRIBUTES_UNKNOWN_OPTIONS", "reject")
        monkeypatch.setenv("REGISTERED_ATTRIBUTES_STRIP_WHITESPACE", "no")
        config = AttributesConfig.load()
        assert config.registration.unknown_options == "reject"
        assert config.strip_whitespace is False

    def test_invalid_env_value_logged_and_ignored(self, monkeypatch, tmp_path, caplog):
        _point_config_at(monkeypatch, tmp_path)
        monkeypatch.setenv("REGISTERED_ATTRIBUTES_UNKNOWN_OPTIONS", "explode")
        with caplog.at_level(logging.WARNING):
            config = AttributesConfig.load()
        assert config.registration.unknown_options == "reject"
        assert "REGISTERED_ATTRIBUTES_UNKNOWN_OPTIONS" in caplog.text

    def test_corrupt_file_logged_and_ignored(self, monkeypatch, tmp_path, caplog):
        config_file = _point_config_at(monkeypatch, tmp_path)
        config_file.write_text("{not json")
        with caplog.at_level(logging.WARNING):
            config = AttributesConfig.load()
        assert config.registration.unknown_options == "reject"
        assert "Failed to load config" in caplog.text

    def test_save_round_trip(self, monkeypatch, tmp_path):
        config_file = _point_config_at(monkeypatch, tmp_path)
        AttributesConfig(registration=RegistrationConfig(unknown_options="ignore")).save()
        assert json.loads(config_file.read_text()) == {
            "registration": {"unknown_options": "ignore", "strip_whitespace": True}
        }
        assert AttributesConfig.load().registration.unknown_options == "ignore"


class TestGlobalConfig:
    def test_configure_replaces_global(self):
        custom = AttributesConfig(registration=RegistrationConfig(strip_whitespace=False))
        configure(custom)
        assert get_config() is custom

    def test_reset_forces_reload(self, monkeypatch, tmp_path):
        _point_config_at(monkeypatch, tmp_path)
        custom = AttributesConfig()
        configure(custom)
        reset_config()
        assert get_config() is not custom


def test_parse_bool():
    assert parse_bool("Yes") is True
    assert parse_bool("0") is False
