"""Shared helper for handing completion callbacks to a scheduler."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .domain.interfaces import IScheduler
from .infrastructure.decorators import log_callback_errors

_LOGGER = logging.getLogger(__name__)


def schedule_callback(
    scheduler: IScheduler,
    operation_name: str,
    callback: Optional[Callable[..., Any]],
    *args: Any,
) -> None:
    """Schedule ``callback(*args)``, logging any exception it raises.

    A missing callback is allowed: the outcome is dropped, as a real
    persistence call without a callback would drop it.
    """
    if callback is None:
        _LOGGER.debug("%s called without a callback; outcome dropped", operation_name)
        return
    if _LOGGER.isEnabledFor(logging.DEBUG):
        _LOGGER.debug("Scheduling %s callback with %r", operation_name, args)
    scheduler.schedule(log_callback_errors(operation_name)(callback), *args)
