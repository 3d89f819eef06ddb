"""Load model and query doubles from a YAML fixture file.

A fixture file describes named doubles so a test module can share one set
of fake records:

    version: 1
    models:
      alice:
        props: {name: Alice}
        save: {err: validation failed}
    queries:
      find_users:
        result: ["$alice"]

Strings of the form ``$name`` inside a query result refer to the model
double called ``name``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import voluptuous as vol
import yaml

from .chainable_double import ChainableDouble, create_chainable_double
from .const import (
    FIXTURE_MODELS,
    FIXTURE_QUERIES,
    FIXTURE_VERSION,
    KEY_RESULT,
    MODEL_REFERENCE_PREFIX,
)
from .domain.interfaces import IScheduler
from .model_double import ModelDouble, create_model_double

_LOGGER = logging.getLogger(__name__)


def _fixture_version(value: Any) -> int:
    """Accept the supported version as an int or its exact string form."""
    if (type(value) is int and value == FIXTURE_VERSION) or value == str(FIXTURE_VERSION):
        return FIXTURE_VERSION
    raise vol.Invalid(f"unsupported fixture version {value!r}, expected {FIXTURE_VERSION}")


FIXTURE_SCHEMA = vol.Schema(
    {
        vol.Required("version"): _fixture_version,
        vol.Optional(FIXTURE_MODELS, default=dict): vol.Any(None, {str: vol.Any(None, dict)}),
        vol.Optional(FIXTURE_QUERIES, default=dict): vol.Any(None, {str: vol.Any(None, dict)}),
    }
)


@dataclass
class DoubleFixtures:
    """Doubles built from a fixture file.

    Attributes:
        models: Model doubles by name
        queries: Chainable query doubles by name
    """

    models: Dict[str, ModelDouble] = field(default_factory=dict)
    queries: Dict[str, ChainableDouble] = field(default_factory=dict)


def load_fixtures(
    path: Union[str, Path],
    *,
    scheduler: Optional[IScheduler] = None,
) -> DoubleFixtures:
    """Load and build doubles from a YAML fixture file.

    Args:
        path: Fixture file path
        scheduler: Scheduler for every double built (default: package default)

    Returns:
        Built doubles

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid YAML or not a valid fixture
    """
    fixture_file = Path(path)
    if not fixture_file.exists():
        raise FileNotFoundError(f"Fixture file not found: {fixture_file}")

    try:
        document = yaml.safe_load(fixture_file.read_text())
    except yaml.YAMLError as err:
        raise ValueError(f"Invalid YAML: {err}") from err

    if not document:
        raise ValueError("Fixture file is empty")

    fixtures = build_fixtures(document, scheduler=scheduler)
    _LOGGER.debug(
        "Loaded %d model(s) and %d query double(s) from %s",
        len(fixtures.models),
        len(fixtures.queries),
        fixture_file,
    )
    return fixtures


def build_fixtures(
    document: Any,
    *,
    scheduler: Optional[IScheduler] = None,
) -> DoubleFixtures:
    """Build doubles from an already parsed fixture document.

    Raises:
        ValueError: If the document does not match the fixture schema
    """
    try:
        config = FIXTURE_SCHEMA(document)
    except vol.Invalid as err:
        raise ValueError(f"Invalid fixture document: {err}") from err

    fixtures = DoubleFixtures()
    for name, options in (config[FIXTURE_MODELS] or {}).items():
        fixtures.models[name] = create_model_double(options, scheduler=scheduler)

    for name, options in (config[FIXTURE_QUERIES] or {}).items():
        options = dict(options or {})
        if KEY_RESULT in options:
            options[KEY_RESULT] = _resolve_references(options[KEY_RESULT], fixtures.models)
        fixtures.queries[name] = create_chainable_double(options, scheduler=scheduler)

    return fixtures


def _resolve_references(value: Any, models: Dict[str, ModelDouble]) -> Any:
    """Replace ``$name`` strings with the model double called ``name``."""
    if isinstance(value, list):
        return [_resolve_references(item, models) for item in value]
    if isinstance(value, str) and value.startswith(MODEL_REFERENCE_PREFIX):
        name = value[len(MODEL_REFERENCE_PREFIX):]
        if name in models:
            return models[name]
        _LOGGER.debug("Unknown model reference %r left as a string", value)
    return value
