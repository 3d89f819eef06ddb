"""Option structures for the model and chainable query doubles.

Every field is optional. Options are resolved once, when a double is
built, and never change afterwards. Loosely shaped mappings are accepted:
a section that is not shaped like a mapping is ignored and its defaults
apply.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Optional, Union

import voluptuous as vol

from ...const import KEY_DESTROY, KEY_ERR, KEY_PROPS, KEY_RESULT, KEY_SAVE
from .outcome import UNSET, Outcome, is_set

_LOGGER = logging.getLogger(__name__)

OUTCOME_SECTION_SCHEMA = vol.Schema(
    {
        vol.Optional(KEY_ERR): object,
        vol.Optional(KEY_RESULT): object,
    },
    extra=vol.ALLOW_EXTRA,
)

# Non-string field names cannot become attributes, so they are dropped
PROPS_SCHEMA = vol.Schema({str: object}, extra=vol.REMOVE_EXTRA)


def _coerce_section(schema: vol.Schema, value: Any, section: str) -> dict[str, Any]:
    """Normalize one options section, falling back to an empty section.

    Args:
        schema: Voluptuous schema for the section
        value: Raw section value supplied by the caller
        section: Section name for logging

    Returns:
        Validated section dict, or {} if the value is absent or malformed
    """
    if value is None:
        return {}
    if isinstance(value, Mapping):
        value = dict(value)
    try:
        return schema(value)
    except vol.Invalid as err:
        _LOGGER.debug("Ignoring malformed %s options (%s): %r", section, err, value)
        return {}


@dataclass(frozen=True)
class DestroyOptions:
    """Outcome configuration for ``ModelDouble.destroy``.

    Attributes:
        err: Error passed to the destroy callback (default: None)
    """

    err: Any = None

    @classmethod
    def from_mapping(cls, section: Any) -> DestroyOptions:
        """Build from a ``{"err": ...}`` mapping; anything else gives defaults."""
        if isinstance(section, cls):
            return section
        data = _coerce_section(OUTCOME_SECTION_SCHEMA, section, KEY_DESTROY)
        return cls(err=data.get(KEY_ERR))


@dataclass(frozen=True)
class SaveOptions:
    """Outcome configuration for ``ModelDouble.save``.

    Attributes:
        err: Error passed to the save callback (default: None)
        result: Result passed to the save callback (default: UNSET, meaning
            the model double itself)
    """

    err: Any = None
    result: Any = UNSET

    @classmethod
    def from_mapping(cls, section: Any) -> SaveOptions:
        """Build from a ``{"err": ..., "result": ...}`` mapping."""
        if isinstance(section, cls):
            return section
        data = _coerce_section(OUTCOME_SECTION_SCHEMA, section, KEY_SAVE)
        return cls(err=data.get(KEY_ERR), result=data.get(KEY_RESULT, UNSET))

    def outcome(self, model: Any) -> Outcome:
        """Resolve the save outcome for ``model``.

        Example:
            >>> SaveOptions(err="boom", result=1).outcome(model)
            Outcome(err='boom', result=None)
            >>> SaveOptions().outcome(model).result is model
            True
        """
        return Outcome.resolve(self.err, self.result, default=lambda: model)


@dataclass(frozen=True)
class ModelDoubleOptions:
    """Configuration for ``create_model_double``.

    Attributes:
        props: Record fields set as attributes on the double
        destroy: Outcome of ``destroy``
        save: Outcome of ``save``

    Example:
        >>> options = ModelDoubleOptions.from_mapping(
        ...     {"props": {"id": 7}, "save": {"err": "boom"}}
        ... )
        >>> options.save.err
        'boom'
        >>> options.destroy.err is None
        True
    """

    props: Mapping[str, Any] = field(default_factory=dict)
    destroy: DestroyOptions = field(default_factory=DestroyOptions)
    save: SaveOptions = field(default_factory=SaveOptions)

    def __post_init__(self) -> None:
        """Freeze props and coerce loosely typed sections."""
        props = _coerce_section(PROPS_SCHEMA, self.props, KEY_PROPS)
        object.__setattr__(self, "props", MappingProxyType(props))
        object.__setattr__(self, "destroy", DestroyOptions.from_mapping(self.destroy))
        object.__setattr__(self, "save", SaveOptions.from_mapping(self.save))

    @classmethod
    def from_mapping(cls, options: Any) -> ModelDoubleOptions:
        """Build options from a plain mapping.

        Args:
            options: Mapping with optional ``props``, ``destroy`` and
                ``save`` keys. None or a non-mapping yields defaults.

        Returns:
            Resolved options
        """
        if options is None:
            return cls()
        if not isinstance(options, Mapping):
            _LOGGER.debug("Ignoring non-mapping model double options: %r", options)
            return cls()
        return cls(
            props=options.get(KEY_PROPS),
            destroy=options.get(KEY_DESTROY),
            save=options.get(KEY_SAVE),
        )

    @classmethod
    def coerce(cls, options: Union[ModelDoubleOptions, Mapping, None]) -> ModelDoubleOptions:
        """Return ``options`` as a ModelDoubleOptions instance."""
        if isinstance(options, cls):
            return options
        return cls.from_mapping(options)


@dataclass(frozen=True)
class ChainableDoubleOptions:
    """Configuration for ``create_chainable_double``.

    Attributes:
        err: Error passed to the exec callback (default: None)
        result: Result passed to the exec callback (default: UNSET, meaning
            a fresh empty list)
    """

    err: Any = None
    result: Any = UNSET

    @classmethod
    def from_mapping(cls, options: Any) -> ChainableDoubleOptions:
        """Build options from a ``{"err": ..., "result": ...}`` mapping."""
        data = _coerce_section(OUTCOME_SECTION_SCHEMA, options, "chainable")
        return cls(err=data.get(KEY_ERR), result=data.get(KEY_RESULT, UNSET))

    @classmethod
    def coerce(
        cls, options: Union[ChainableDoubleOptions, Mapping, None]
    ) -> ChainableDoubleOptions:
        """Return ``options`` as a ChainableDoubleOptions instance."""
        if isinstance(options, cls):
            return options
        return cls.from_mapping(options)

    @property
    def has_result(self) -> bool:
        """Return True if an explicit result was configured."""
        return is_set(self.result)

    def outcome(self, default: Optional[Callable[[], Any]] = None) -> Outcome:
        """Resolve the exec outcome.

        Args:
            default: Builds the result when none is configured
                (default: ``list``, a fresh empty list per call)
        """
        return Outcome.resolve(self.err, self.result, default=default or list)
