"""
Tests for envget settings
"""
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from envget import resolve
from envget.core.config import Settings, get_settings


def test_config_defaults():
    """Test default values"""
    settings = get_settings()

    assert settings.log_level == "WARNING"
    assert settings.log_format == "text"
    assert settings.log_sensitive_data is False
    assert settings.file_suffix == "_FILE"
    assert settings.file_encoding == "utf-8"


def test_config_custom_values():
    """Test ENVGET_* overrides"""
    with patch.dict(os.environ, {
        "ENVGET_LOG_LEVEL": "debug",
        "ENVGET_LOG_FORMAT": "JSON",
        "ENVGET_LOG_SENSITIVE_DATA": "true",
        "ENVGET_FILE_SUFFIX": "_PATH",
        "ENVGET_FILE_ENCODING": "latin-1",
    }):
        get_settings.cache_clear()
        settings = get_settings()

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.log_sensitive_data is True
        assert settings.file_suffix == "_PATH"
        assert settings.file_encoding == "latin-1"


def test_empty_values_are_ignored():
    with patch.dict(os.environ, {"ENVGET_FILE_SUFFIX": ""}):
        get_settings.cache_clear()
        assert get_settings().file_suffix == "_FILE"


def test_config_validation():
    with pytest.raises(ValidationError):
        Settings(log_format="xml")
    with pytest.raises(ValidationError):
        Settings(file_suffix="")


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_dotenv_in_working_directory(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("ENVGET_LOG_LEVEL=info\nAPP_DB_HOST=from-dotenv\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("APP_DB_HOST", raising=False)
    before = dict(os.environ)

    assert get_settings().log_level == "INFO"
    assert dict(os.environ) == before


def test_dotenv_does_not_leak_into_resolution(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("APP_DB_HOST=from-dotenv\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("APP_DB_HOST", raising=False)
    monkeypatch.delenv("APP_DB_HOST_FILE", raising=False)

    assert resolve("APP_DB_HOST", "unset") == "unset"
    assert "APP_DB_HOST" not in os.environ


def test_invalid_settings_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("ENVGET_LOG_FORMAT", "xml")
    monkeypatch.setenv("ENVGET_FILE_SUFFIX", "_PATH")
    settings = get_settings()

    assert settings.log_format == "text"
    assert settings.file_suffix == "_FILE"


def test_unknown_encoding_rejected():
    with pytest.raises(ValidationError):
        Settings(file_encoding="no-such-codec")
