"""Infrastructure layer decorators."""

from .error_handler import log_callback_errors

__all__ = [
    "log_callback_errors",
]
