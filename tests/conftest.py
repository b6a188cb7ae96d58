"""
Pytest configuration and fixtures
"""
import os

import pytest

from envget.core.config import get_settings
from envget.core.logging_config import LoggingConfig


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Drop ENVGET_* overrides and the cached settings around every test"""
    for key in list(os.environ):
        if key.startswith("ENVGET_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    LoggingConfig.reset()


@pytest.fixture
def env():
    """An empty environment mapping passed to resolve(environ=...)"""
    return {}


@pytest.fixture
def value_file(tmp_path):
    """Factory writing a value file and returning its path as a string"""
    counter = {"n": 0}

    def _write(content: str) -> str:
        counter["n"] += 1
        path = tmp_path / f"value_{counter['n']}.txt"
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write
