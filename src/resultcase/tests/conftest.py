"""Shared fixtures."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from resultcase.foundation.config import clear_settings_cache


@pytest.fixture
def settings_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Clean RESULTCASE_* environment; settings cache is dropped before and after."""
    for key in list(os.environ):
        if key.startswith("RESULTCASE_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    yield monkeypatch
    clear_settings_cache()
