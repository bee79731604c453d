"""Uniform field access over ORM rows, pydantic models and plain dicts."""

from typing import Any

_MISSING = object()


def field_value(record: Any, *names: str, default: Any = None) -> Any:
    """Return the first of ``names`` present on ``record``.

    Several spellings are accepted because the same assignment reaches the
    rules as an ORM row (``allocation_percentage``) or as a client payload
    (``allocationPercentage``).
    """
    for name in names:
        if isinstance(record, dict):
            value = record.get(name, _MISSING)
        else:
            value = getattr(record, name, _MISSING)
        if value is not _MISSING:
            return value
    return default
