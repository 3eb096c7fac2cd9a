# tests/conftest.py
from __future__ import annotations

import pytest

from factorials import runtime


@pytest.fixture(autouse=True)
def fresh_runtime():
    """Every test starts from the default runtime (no profile applied)."""
    runtime.reset()
    yield
    runtime.reset()
