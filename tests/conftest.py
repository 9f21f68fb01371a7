"""Shared test fixtures for htmlchop."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop HTMLCHOP_ env vars and the cached settings before each test."""
    from htmlchop.config import _clear_settings_cache

    for key in list(os.environ):
        if key.startswith("HTMLCHOP_"):
            monkeypatch.delenv(key, raising=False)
    _clear_settings_cache()
    yield
    _clear_settings_cache()
