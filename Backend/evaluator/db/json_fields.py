# Backend/evaluator/db/json_fields.py
"""Helpers for the JSON-encoded text columns (secondary skills, rubric scores)."""
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def dumps(value: Any) -> str:
    return json.dumps(value)


def loads_or_default(raw: Any, default: Any, field: str = "field") -> Any:
    """
    Decode a stored JSON value, falling back to ``default`` when it is missing,
    corrupt, or of the wrong container type. A single bad column must never
    fail the whole record.
    """
    if raw is None or raw == "":
        return default
    if isinstance(raw, type(default)):
        return raw
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Malformed JSON in stored %s; substituting an empty value", field)
        return default
    if not isinstance(value, type(default)):
        logger.warning("Stored %s has type %s, expected %s", field, type(value).__name__, type(default).__name__)
        return default
    return value
