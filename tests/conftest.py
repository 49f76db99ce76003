"""Shared fixtures for title rendering tests."""

from __future__ import annotations

import pytest

from title_surfaces import RecordingSurface


@pytest.fixture
def surface() -> RecordingSurface:
    """Return a fresh recording surface."""
    return RecordingSurface()
