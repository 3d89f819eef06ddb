"""Constants for the ORM test doubles.

Option keys mirror the shape test authors pass to the factories, so a
mapping such as ``{"save": {"err": "boom"}}`` reads the same in test code
and in YAML fixture files.
"""

from __future__ import annotations

# Option keys
KEY_PROPS = "props"
KEY_DESTROY = "destroy"
KEY_SAVE = "save"
KEY_ERR = "err"
KEY_RESULT = "result"

# Names reserved for model operations; props with these names are overridden
MODEL_OPERATIONS = (KEY_DESTROY, KEY_SAVE)

# Chained query-builder calls a QueryChain answers with itself
CHAIN_METHODS = (
    "where",
    "sort",
    "limit",
    "skip",
    "paginate",
    "populate",
    "select",
    "omit",
)

# Fixture files
FIXTURE_VERSION = 1
FIXTURE_MODELS = "models"
FIXTURE_QUERIES = "queries"
MODEL_REFERENCE_PREFIX = "$"

# CallbackCapture.wait() default timeout (seconds)
DEFAULT_CALLBACK_TIMEOUT = 1.0
