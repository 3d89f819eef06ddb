"""Scheduler posting callbacks onto the asyncio event loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional

from ...domain.interfaces import IScheduler
from .manual_scheduler import DEFERRED_QUEUE, ManualScheduler, invoke_callback

_LOGGER = logging.getLogger(__name__)


class EventLoopScheduler(IScheduler):
    """Defers callbacks to the next iteration of the asyncio event loop.

    Callbacks are posted with ``loop.call_soon``, so they run after the
    current synchronous code yields, in FIFO order with every other
    callback scheduled on the loop.

    Outside a running loop (a plain synchronous test), callbacks are queued
    on the fallback ManualScheduler and run when the test calls
    ``run_pending()``.

    Example:
        >>> scheduler = EventLoopScheduler()
        >>> scheduler.schedule(callback, None, [])
        >>> await asyncio.sleep(0)  # callback(None, []) has now run
    """

    def __init__(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        fallback: Optional[ManualScheduler] = None,
    ):
        """Initialize scheduler.

        Args:
            loop: Loop to post onto (default: the running loop at schedule time)
            fallback: Queue used when no loop is available
                (default: the shared deferred queue)
        """
        self._loop = loop
        self._fallback = fallback if fallback is not None else DEFERRED_QUEUE

    @property
    def fallback(self) -> ManualScheduler:
        """Queue holding callbacks scheduled without an event loop."""
        return self._fallback

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        """Post ``callback(*args)`` onto the event loop."""
        loop = self._resolve_loop()
        if loop is None:
            _LOGGER.debug("No running event loop; deferring callback until run_pending()")
            self._fallback.schedule(callback, *args)
            return
        loop.call_soon(invoke_callback, callback, args)

    def _resolve_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        """Return the loop to post onto, or None if none is usable."""
        if self._loop is not None and not self._loop.is_closed():
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None
