"""Schedulers that defer completion callbacks.

The factories use the default scheduler unless one is passed explicitly.
The default posts onto the running asyncio event loop and falls back to a
shared queue, drained by ``run_pending()``, when no loop is running.
"""

from __future__ import annotations

import logging

from ...domain.interfaces import IScheduler
from .event_loop_scheduler import EventLoopScheduler
from .manual_scheduler import DEFERRED_QUEUE, ManualScheduler, invoke_callback

_LOGGER = logging.getLogger(__name__)

_default_scheduler: IScheduler = EventLoopScheduler()


def get_default_scheduler() -> IScheduler:
    """Return the scheduler used by doubles built without one."""
    return _default_scheduler


def set_default_scheduler(scheduler: IScheduler) -> IScheduler:
    """Replace the default scheduler.

    Doubles capture their scheduler when built, so the change applies to
    doubles created afterwards.

    Args:
        scheduler: New default scheduler

    Returns:
        The previous default, so callers can restore it
    """
    global _default_scheduler
    previous = _default_scheduler
    _default_scheduler = scheduler
    _LOGGER.debug("Default scheduler set to %r", scheduler)
    return previous


def run_pending() -> int:
    """Run callbacks waiting outside an event loop.

    Drains the default scheduler if it is a ManualScheduler (or its
    fallback queue if it is an EventLoopScheduler), then the shared
    deferred queue.

    Returns:
        Number of callbacks run
    """
    queues: list[ManualScheduler] = []
    scheduler = get_default_scheduler()
    if isinstance(scheduler, ManualScheduler):
        queues.append(scheduler)
    elif isinstance(scheduler, EventLoopScheduler):
        queues.append(scheduler.fallback)
    if DEFERRED_QUEUE not in queues:
        queues.append(DEFERRED_QUEUE)
    return sum(queue.run_pending() for queue in queues)


__all__ = [
    "DEFERRED_QUEUE",
    "EventLoopScheduler",
    "ManualScheduler",
    "get_default_scheduler",
    "invoke_callback",
    "run_pending",
    "set_default_scheduler",
]
