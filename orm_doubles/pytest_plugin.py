"""Pytest plugin guarding the shared deferred callback queue.

Outside a running event loop, doubles park their callbacks on a queue
shared by the whole process until ``run_pending()`` drains it. A test that
never drains would otherwise leak its callbacks into the next test that
does. This plugin clears the queue around every test and fails the test
that left callbacks behind.

Loaded automatically through the ``pytest11`` entry point. Tests that
leave callbacks pending on purpose opt out with
``@pytest.mark.allow_pending_callbacks``.
"""

from __future__ import annotations

import logging

import pytest

from .infrastructure.scheduling import DEFERRED_QUEUE

_LOGGER = logging.getLogger(__name__)

ALLOW_PENDING_MARKER = "allow_pending_callbacks"


def pytest_configure(config):
    """Register the opt-out marker."""
    config.addinivalue_line(
        "markers",
        f"{ALLOW_PENDING_MARKER}: callbacks left on the deferred queue are dropped silently",
    )


@pytest.fixture(autouse=True)
def orm_doubles_deferred_queue(request):
    """Fail a test that leaves callbacks on the deferred queue."""
    DEFERRED_QUEUE.clear()
    yield DEFERRED_QUEUE
    dropped = DEFERRED_QUEUE.clear()
    if not dropped:
        return
    _LOGGER.debug("Dropped %d pending callback(s) after %s", dropped, request.node.nodeid)
    if request.node.get_closest_marker(ALLOW_PENDING_MARKER) is None:
        pytest.fail(
            f"{dropped} callback(s) scheduled without a running event loop never ran; "
            "call orm_doubles.run_pending() before the test ends",
            pytrace=False,
        )
