"""Chainable query double.

Stands in for a collection query method such as ``find``: calling it
returns a chain whose ``exec`` reports a configured outcome to a
completion callback on a later tick.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union
from unittest.mock import Mock

from ._callbacks import schedule_callback
from .const import CHAIN_METHODS
from .domain.interfaces import IScheduler
from .domain.value_objects import ChainableDoubleOptions
from .infrastructure.scheduling import get_default_scheduler

_LOGGER = logging.getLogger(__name__)


class QueryChain:
    """Result of one query-builder call.

    Modifiers such as ``where`` or ``sort`` accept any arguments and return
    the same chain; ``exec`` ends the chain.
    """

    def __init__(self, options: ChainableDoubleOptions, scheduler: IScheduler):
        self._options = options
        self._scheduler = scheduler

    def exec(self, callback=None) -> None:
        """Schedule ``callback(err, result)`` with the configured outcome."""
        outcome = self._options.outcome()
        schedule_callback(self._scheduler, "exec", callback, *outcome.args)

    def __getattr__(self, name: str) -> Any:
        if name in CHAIN_METHODS:
            return self._modifier
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def _modifier(self, *args: Any, **kwargs: Any) -> QueryChain:
        return self


class ChainableDouble:
    """Callable stand-in for a query-builder method.

    Configuration is captured once; every call ignores its arguments and
    returns a fresh QueryChain sharing that configuration. Calls are
    recorded for assertions:

        >>> User.find = create_chainable_double({"result": [alice]})
        >>> User.find({"name": "Alice"}).exec(on_found)
        >>> User.find.call_args
        call({'name': 'Alice'})

    Works with ``unittest.mock.patch.object(User, "find", double)``; the
    double is not a descriptor, so it is never bound to an instance.
    """

    def __init__(self, options: ChainableDoubleOptions, scheduler: IScheduler):
        self._options = options
        self._scheduler = scheduler
        self._spy = Mock(name="query")

    @property
    def options(self) -> ChainableDoubleOptions:
        """Configuration shared by every chain this double returns."""
        return self._options

    @property
    def spy(self) -> Mock:
        """Mock recording every call, for ``assert_called_*`` helpers."""
        return self._spy

    @property
    def call_count(self) -> int:
        """Number of times the double was called."""
        return self._spy.call_count

    @property
    def call_args(self):
        """Arguments of the most recent call, or None."""
        return self._spy.call_args

    @property
    def call_args_list(self):
        """Arguments of every call, oldest first."""
        return self._spy.call_args_list

    def reset_calls(self) -> None:
        """Forget recorded calls; the configuration is unchanged."""
        self._spy.reset_mock()

    def __call__(self, *args: Any, **kwargs: Any) -> QueryChain:
        """Record the call and return a fresh chain."""
        self._spy(*args, **kwargs)
        return QueryChain(self._options, self._scheduler)

    def __repr__(self) -> str:
        """Developer representation."""
        return f"ChainableDouble({self._options!r}, calls={self.call_count})"


def create_chainable_double(
    options: Union[ChainableDoubleOptions, Mapping, None] = None,
    *,
    scheduler: Optional[IScheduler] = None,
) -> ChainableDouble:
    """Build a fake query-builder method.

    Args:
        options: ChainableDoubleOptions, or a mapping with the optional
            keys ``err`` and ``result``. Malformed options fall back to
            defaults.
        scheduler: Scheduler deferring the exec callbacks
            (default: the package default scheduler)

    Returns:
        Callable returning a fresh chain on every call. ``exec(cb)`` calls
        ``cb(err, result)`` where result is the configured result, a new
        empty list when none is configured, or None on error.

    Example:
        >>> find = create_chainable_double({"err": "connection lost"})
        >>> find({"id": 1}).exec(lambda err, rows: print(err, rows))
        >>> await asyncio.sleep(0)
        connection lost None
    """
    options = ChainableDoubleOptions.coerce(options)
    if _LOGGER.isEnabledFor(logging.DEBUG):
        _LOGGER.debug("Created chainable double with %r", options)
    return ChainableDouble(options, scheduler or get_default_scheduler())
