"""Error handling decorators for completion callbacks."""

import inspect
import logging
from functools import wraps
from typing import Any, Callable


def log_callback_errors(
    operation_name: str,
    logger: logging.Logger = None,
    reraise: bool = True,
    default_return: Any = None,
):
    """Decorator that logs exceptions raised by a completion callback.

    A callback runs on a later tick, far from the ``save()`` or ``exec()``
    call that scheduled it, so the log line names the operation the
    callback completes.

    Args:
        operation_name: Operation the callback completes, used in log lines
        logger: Logger to use (defaults to the callback's module logger)
        reraise: Whether to re-raise the exception after logging
        default_return: Value to return on error if not re-raising

    Example:
        @log_callback_errors("User.save")
        def on_saved(err, user):
            assert err is None
    """

    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            log = logger or logging.getLogger(func.__module__)
            try:
                return await func(*args, **kwargs)
            except Exception as err:
                log.error(
                    "%s callback error: %s",
                    operation_name,
                    err,
                    exc_info=True,
                )
                if reraise:
                    raise
                return default_return

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            log = logger or logging.getLogger(getattr(func, "__module__", None) or __name__)
            try:
                return func(*args, **kwargs)
            except Exception as err:
                log.error(
                    "%s callback error: %s",
                    operation_name,
                    err,
                    exc_info=True,
                )
                if reraise:
                    raise
                return default_return

        return async_wrapper if inspect.iscoroutinefunction(func) else sync_wrapper

    return decorator
