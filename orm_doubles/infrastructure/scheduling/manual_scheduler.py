"""Scheduler drained explicitly by test code."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import deque
from typing import Any, Callable, Deque, Set, Tuple

from ...domain.interfaces import IScheduler

_LOGGER = logging.getLogger(__name__)

# Strong references to running coroutine callbacks; the loop holds only weak ones
_BACKGROUND_TASKS: Set[asyncio.Future[Any]] = set()


def invoke_callback(callback: Callable[..., Any], args: Tuple[Any, ...]) -> None:
    """Invoke a scheduled callback.

    A coroutine callback is started as a task when an event loop is
    running, and run to completion otherwise.
    """
    result = callback(*args)
    if not inspect.isawaitable(result):
        return
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        asyncio.run(_await(result))
    else:
        task = asyncio.ensure_future(result)
        _BACKGROUND_TASKS.add(task)
        task.add_done_callback(_on_task_done)


def _on_task_done(task: asyncio.Future[Any]) -> None:
    """Release a finished coroutine callback and consume its exception."""
    _BACKGROUND_TASKS.discard(task)
    if task.cancelled():
        return
    err = task.exception()
    if err is not None:
        # Callbacks scheduled by the doubles already logged it at ERROR
        _LOGGER.debug("Coroutine callback failed: %r", err)


async def _await(awaitable: Any) -> Any:
    return await awaitable


class ManualScheduler(IScheduler):
    """FIFO queue of callbacks that run only when drained.

    Useful for synchronous tests: nothing runs until the test calls
    ``run_pending()``, so a test can assert what happened before and after
    the completion callbacks fired.

    Example:
        >>> scheduler = ManualScheduler()
        >>> model = create_model_double(scheduler=scheduler)
        >>> model.save(on_saved)
        >>> scheduler.pending
        1
        >>> scheduler.run_pending()
        1
    """

    def __init__(self, name: str = "manual"):
        """Initialize an empty queue.

        Args:
            name: Label used in log lines
        """
        self._name = name
        self._queue: Deque[Tuple[Callable[..., Any], Tuple[Any, ...]]] = deque()

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        """Queue ``callback(*args)`` until the next ``run_pending()``."""
        self._queue.append((callback, args))
        _LOGGER.debug(
            "Queued callback on %s scheduler (%d pending)", self._name, len(self._queue)
        )

    @property
    def pending(self) -> int:
        """Number of callbacks waiting to run."""
        return len(self._queue)

    def run_pending(self) -> int:
        """Run queued callbacks in FIFO order until the queue is empty.

        Callbacks scheduled while draining run in the same pass, after the
        ones already queued. If a callback raises, it is dropped from the
        queue, the exception propagates, and the remaining callbacks stay
        queued.

        Returns:
            Number of callbacks run
        """
        ran = 0
        while self._queue:
            callback, args = self._queue.popleft()
            invoke_callback(callback, args)
            ran += 1
        if ran:
            _LOGGER.debug("Ran %d callback(s) on %s scheduler", ran, self._name)
        return ran

    def clear(self) -> int:
        """Drop all queued callbacks without running them.

        Returns:
            Number of callbacks dropped
        """
        dropped = len(self._queue)
        self._queue.clear()
        return dropped

    def __repr__(self) -> str:
        """Developer representation."""
        return f"ManualScheduler(name={self._name!r}, pending={self.pending})"


# Callbacks scheduled while no event loop is running wait here
DEFERRED_QUEUE = ManualScheduler(name="deferred")
