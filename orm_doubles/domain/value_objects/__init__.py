"""Value Objects for the ORM test doubles.

Value Objects here are immutable:
- Option structures capture what a double reports, fixed at construction
- Outcomes pair the error and result handed to a completion callback
"""

from .double_options import (
    ChainableDoubleOptions,
    DestroyOptions,
    ModelDoubleOptions,
    SaveOptions,
)
from .outcome import UNSET, Outcome, is_set

__all__ = [
    "ChainableDoubleOptions",
    "DestroyOptions",
    "ModelDoubleOptions",
    "Outcome",
    "SaveOptions",
    "UNSET",
    "is_set",
]
