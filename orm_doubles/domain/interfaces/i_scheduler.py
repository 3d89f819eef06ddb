"""IScheduler interface for deferring completion callbacks."""

from abc import ABC, abstractmethod
from typing import Any, Callable


class IScheduler(ABC):
    """Defers a callback until the current synchronous call has returned.

    Doubles never invoke a completion callback inside ``destroy``, ``save``
    or ``exec``. They hand it to a scheduler, which runs it later on the
    same thread. This keeps calling code honest about asynchronous
    completion: code that assumes the callback already ran when the call
    returns fails in tests the way it would against a real data store.

    Implementations must run callbacks in the order they were scheduled.

    Example:
        >>> scheduler.schedule(callback, None, record)
        >>> # callback(None, record) runs on a later tick
    """

    @abstractmethod
    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        """Schedule ``callback(*args)`` to run after the current call returns.

        Args:
            callback: Completion callback to invoke
            *args: Arguments to invoke it with
        """
