"""JSON conversion helpers for parameter values."""

import json
from typing import Any

from pydantic import BaseModel


def to_json_object(value: Any) -> Any:
    """Convert a value graph into plain JSON-compatible types.

    Objects that know their own JSON form (filters, groups, shapes, slot
    values) expose ``to_json_object()`` and are asked for it. Pydantic
    models without one are dumped. Sets and tuples become lists.

    Examples:
        >>> to_json_object({"ids": (1, 2)})
        {'ids': [1, 2]}
    """
    if hasattr(value, "to_json_object") and not isinstance(value, type):
        return to_json_object(value.to_json_object())
    if isinstance(value, BaseModel):
        return to_json_object(value.model_dump())
    if isinstance(value, dict):
        return {str(k): to_json_object(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_object(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return [to_json_object(v) for v in value]
    return value


def to_json_str(value: Any) -> str:
    """Serialize ``value`` as compact JSON.

    Examples:
        >>> to_json_str({"name": {"$eq": "Starbucks"}})
        '{"name":{"$eq":"Starbucks"}}'
    """
    return json.dumps(
        to_json_object(value), separators=(",", ":"), ensure_ascii=False
    )


__all__ = ["to_json_object", "to_json_str"]
