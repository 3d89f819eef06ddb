"""Test doubles for ORM models and query chains.

Two factories build fakes that report configured outcomes through
completion callbacks, deferred the way a real persistence layer defers
them:

- ``create_model_double``: a record with ``destroy`` and ``save``
- ``create_chainable_double``: a query-builder method whose chain ends in
  ``exec``

Example:
    >>> alice = create_model_double({"props": {"name": "Alice"}})
    >>> with patch.object(User, "find_one", create_chainable_double({"result": alice})):
    ...     await service.rename_user(1, "Alicia")
    >>> alice.save.assert_called_once()
"""

from .callback_capture import CallbackCapture
from .chainable_double import ChainableDouble, QueryChain, create_chainable_double
from .domain.exceptions import CallbackNotInvokedError
from .domain.interfaces import IScheduler
from .domain.value_objects import (
    UNSET,
    ChainableDoubleOptions,
    DestroyOptions,
    ModelDoubleOptions,
    Outcome,
    SaveOptions,
)
from .fixture_loader import DoubleFixtures, load_fixtures
from .infrastructure.scheduling import (
    EventLoopScheduler,
    ManualScheduler,
    get_default_scheduler,
    run_pending,
    set_default_scheduler,
)
from .model_double import ModelDouble, create_model_double

__all__ = [
    "CallbackCapture",
    "CallbackNotInvokedError",
    "ChainableDouble",
    "ChainableDoubleOptions",
    "DestroyOptions",
    "DoubleFixtures",
    "EventLoopScheduler",
    "IScheduler",
    "ManualScheduler",
    "ModelDouble",
    "ModelDoubleOptions",
    "Outcome",
    "QueryChain",
    "SaveOptions",
    "UNSET",
    "create_chainable_double",
    "create_model_double",
    "get_default_scheduler",
    "load_fixtures",
    "run_pending",
    "set_default_scheduler",
]
