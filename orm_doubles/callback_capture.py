"""Callback recorder for tests driving the doubles.

CallbackCapture is a completion callback that remembers every invocation
and lets async tests await the first one instead of sleeping.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Tuple

from .const import DEFAULT_CALLBACK_TIMEOUT
from .domain.exceptions import CallbackNotInvokedError

_LOGGER = logging.getLogger(__name__)


class CallbackCapture:
    """Completion callback that records its arguments.

    Attributes:
        calls: Argument tuples of every invocation, oldest first

    Example:
        >>> capture = CallbackCapture("save")
        >>> model.save(capture)
        >>> err, result = await capture.wait()
        >>> assert result is model

        >>> # Synchronous tests drain the deferred queue instead
        >>> model.destroy(capture)
        >>> run_pending()
        >>> assert capture.args == (None,)
    """

    def __init__(self, name: str = "callback"):
        """Initialize capture.

        Args:
            name: Label used in failure messages
        """
        self.name = name
        self.calls: List[Tuple[Any, ...]] = []
        self._future: Optional[asyncio.Future] = None

    def __call__(self, *args: Any) -> None:
        """Record one invocation."""
        self.calls.append(args)
        if self._future is not None and not self._future.done():
            self._future.set_result(args)

    @property
    def called(self) -> bool:
        """Return True if the callback ran at least once."""
        return bool(self.calls)

    @property
    def call_count(self) -> int:
        """Number of invocations."""
        return len(self.calls)

    @property
    def args(self) -> Tuple[Any, ...]:
        """Arguments of the first invocation.

        Raises:
            CallbackNotInvokedError: If the callback has not run
        """
        if not self.calls:
            raise CallbackNotInvokedError(f"{self.name} was not invoked")
        return self.calls[0]

    @property
    def err(self) -> Any:
        """Error argument of the first invocation."""
        return self.args[0]

    @property
    def result(self) -> Any:
        """Result argument of the first invocation, None if there was none."""
        args = self.args
        return args[1] if len(args) > 1 else None

    async def wait(self, timeout: float = DEFAULT_CALLBACK_TIMEOUT) -> Tuple[Any, ...]:
        """Wait for the first invocation.

        Args:
            timeout: Seconds to wait before failing

        Returns:
            Arguments of the first invocation

        Raises:
            CallbackNotInvokedError: If the callback does not run in time
        """
        if self.calls:
            return self.calls[0]
        if self._future is None or self._future.done():
            self._future = asyncio.get_running_loop().create_future()
        try:
            return await asyncio.wait_for(asyncio.shield(self._future), timeout)
        except asyncio.TimeoutError as err:
            _LOGGER.debug("%s not invoked within %ss", self.name, timeout)
            raise CallbackNotInvokedError(
                f"{self.name} was not invoked within {timeout}s"
            ) from err

    def __repr__(self) -> str:
        """Developer representation."""
        return f"CallbackCapture(name={self.name!r}, calls={self.calls!r})"
