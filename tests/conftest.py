"""Shared pytest fixtures."""

import pytest

from jsonx_core.config import configure


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch):
    """Every test starts from default settings, whatever the shell exports."""
    for name in ("JSONX_MAX_ARRAY_INDEX", "JSONX_INDENT", "JSONX_SORT_KEYS", "JSONX_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    configure(None)
    yield
    configure(None)
