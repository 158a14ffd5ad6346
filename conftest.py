from __future__ import annotations

from datetime import datetime

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    """A weekday morning used as "now" by time-dependent tests."""
    return datetime(2026, 3, 16, 9, 15, 0)
