"""Domain interfaces (ports) for the ORM test doubles."""

from .i_scheduler import IScheduler

__all__ = ["IScheduler"]
