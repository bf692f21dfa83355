"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

HERE = Path(__file__).resolve().parent
ROOT = HERE.parent
for path in (ROOT, HERE):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

pytest_plugins = ("pytest_asyncio",)

from fakes import FakeClock, FakeContract  # noqa: E402


@pytest.fixture
def fake_contract() -> FakeContract:
    return FakeContract()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
