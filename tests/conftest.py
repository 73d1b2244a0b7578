"""Shared pytest fixtures for the stamp catalog test suite."""

from __future__ import annotations

from typing import List

import pytest

from stamp_catalog.config import get_settings


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Settings are cached process-wide; tests that patch env need a fresh load."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def catalog_lines() -> List[str]:
    """A small mixed input: stamps, a bad line, queries."""
    return [
        "Penny Black 3 1840 London",
        "Inverted Jenny   1,50   1918  Washington  DC",
        "BadLine",
        "Basel Dove 2.00 1845 Basel",
        "Blue Mauritius 7 1847 Port Louis",
        "Twopenny Blue 4 1840 London",
        "1840 1845",
        "1900 1950",
        "1950 1900",
    ]
