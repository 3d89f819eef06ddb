"""Model double: a fake persisted record.

A ModelDouble carries arbitrary record fields as attributes and two
persistence operations, ``destroy`` and ``save``, that report a configured
outcome to a completion callback on a later tick.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from reprlib import recursive_repr
from typing import Any, Optional, Union
from unittest.mock import Mock

from ._callbacks import schedule_callback
from .const import KEY_DESTROY, KEY_SAVE, MODEL_OPERATIONS
from .domain.interfaces import IScheduler
from .domain.value_objects import ModelDoubleOptions
from .infrastructure.scheduling import get_default_scheduler

_LOGGER = logging.getLogger(__name__)


def _record_fields(model: ModelDouble) -> dict[str, Any]:
    return {
        name: value
        for name, value in vars(model).items()
        if name not in MODEL_OPERATIONS
    }


class ModelDouble:
    """Fake persisted record.

    Record fields are plain attributes and may be reassigned freely, the
    way application code mutates a record before saving it. ``destroy`` and
    ``save`` are ``unittest.mock.Mock`` spies, so calls can be asserted:

        >>> user = create_model_double({"props": {"name": "Alice"}})
        >>> user.name = "Alicia"
        >>> user.save(on_saved)
        >>> user.save.assert_called_once_with(on_saved)

    Fields are also readable by key (``user["name"]``).

    Props named ``destroy`` or ``save`` are replaced by the operations. A
    prop named ``fields`` shadows the ``fields()`` method on that instance;
    call ``ModelDouble.fields(model)`` to get the snapshot instead.
    """

    destroy: Mock
    save: Mock

    def __init__(self, props: Optional[Mapping[str, Any]] = None):
        """Create the record shell carrying ``props`` as attributes.

        Operations are bound afterwards by ``create_model_double``.
        """
        for name, value in (props or {}).items():
            if name.startswith("__"):
                _LOGGER.debug("Skipping reserved model field %r", name)
                continue
            try:
                setattr(self, name, value)
            except (AttributeError, TypeError) as err:
                _LOGGER.debug("Skipping model field %r: %s", name, err)

    def fields(self) -> dict[str, Any]:
        """Return a snapshot of the record fields, without the operations."""
        return _record_fields(self)

    def __getitem__(self, name: str) -> Any:
        """Return record field ``name``."""
        record = _record_fields(self)
        if name not in record:
            raise KeyError(name)
        return record[name]

    def __contains__(self, name: object) -> bool:
        """Return True if ``name`` is a record field."""
        return name in _record_fields(self)

    @recursive_repr()
    def __repr__(self) -> str:
        """Developer representation listing the record fields."""
        fields = ", ".join(
            f"{name}={value!r}" for name, value in _record_fields(self).items()
        )
        return f"ModelDouble({fields})"


def create_model_double(
    options: Union[ModelDoubleOptions, Mapping, None] = None,
    *,
    scheduler: Optional[IScheduler] = None,
) -> ModelDouble:
    """Build a fake record with stubbed ``destroy`` and ``save``.

    Args:
        options: ModelDoubleOptions, or a mapping with the optional keys
            ``props``, ``destroy.err``, ``save.err`` and ``save.result``.
            Missing or malformed entries fall back to defaults.
        scheduler: Scheduler deferring the callbacks
            (default: the package default scheduler)

    Returns:
        The model double. ``destroy(cb)`` calls ``cb(err)``; ``save(cb)``
        calls ``cb(err, result)`` where result is the configured result,
        the model itself when none is configured, or None on error.

    Example:
        >>> model = create_model_double({"save": {"err": "boom"}})
        >>> model.save(lambda err, result: print(err, result))
        >>> await asyncio.sleep(0)
        boom None
    """
    options = ModelDoubleOptions.coerce(options)
    scheduler = scheduler or get_default_scheduler()

    model = ModelDouble(options.props)

    def destroy(callback=None):
        schedule_callback(scheduler, KEY_DESTROY, callback, options.destroy.err)

    def save(callback=None):
        outcome = options.save.outcome(model)
        schedule_callback(scheduler, KEY_SAVE, callback, *outcome.args)

    # Bound after construction so save can report the model itself
    model.destroy = Mock(name=KEY_DESTROY, side_effect=destroy)
    model.save = Mock(name=KEY_SAVE, side_effect=save)
    return model
