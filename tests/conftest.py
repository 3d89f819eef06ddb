"""Pytest configuration and fixtures for orm_doubles tests."""

from __future__ import annotations

import pytest

from orm_doubles import (
    CallbackCapture,
    ManualScheduler,
    set_default_scheduler,
)

pytest_plugins = ["pytester", "orm_doubles.pytest_plugin"]


@pytest.fixture
def manual_scheduler():
    """Install a ManualScheduler as the default and restore the old one."""
    scheduler = ManualScheduler(name="test")
    previous = set_default_scheduler(scheduler)
    yield scheduler
    set_default_scheduler(previous)


@pytest.fixture
def capture() -> CallbackCapture:
    """Return a fresh completion callback recorder."""
    return CallbackCapture("test callback")


@pytest.fixture
def user_props():
    """Record fields for a typical user model."""
    return {"id": 7, "name": "Alice", "email": "alice@example.com"}
