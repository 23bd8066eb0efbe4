"""Row filters and boolean filter groups.

A filter renders itself as a JSON object; groups combine filters (or
other groups) under ``$and`` / ``$or``:

    {"name": {"$bw": "Star"}}
    {"$or": [{"name": {"$bw": "Star"}}, {"category": {"$eq": "cafe"}}]}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional, Protocol, runtime_checkable

from .constants import AND, FIELD_OPS, LOGICAL_OPS
from .jsonutil import to_json_object, to_json_str

if TYPE_CHECKING:
    from .parameters import FilterList


@runtime_checkable
class Filter(Protocol):
    """Anything that can be attached to a request as a row filter."""

    def to_json_object(self) -> Any: ...

    def to_json_str(self) -> str: ...


@runtime_checkable
class Filterable(Protocol):
    """Something holding a filter list that pop_filters can pull from."""

    def get_filter_list(self) -> Optional["FilterList"]: ...


@dataclass(frozen=True)
class FieldFilter:
    """A single operator applied to one field, e.g. ``{"rating": {"$gt": 3}}``."""

    op: str
    field_name: str
    arg: Any = True

    def __post_init__(self):
        if self.op not in FIELD_OPS:
            raise ValueError(f"Unknown field operator: {self.op}")

    def to_json_object(self) -> Any:
        return {self.field_name: {self.op: to_json_object(self.arg)}}

    def to_json_str(self) -> str:
        return to_json_str(self)


@dataclass
class FilterGroup:
    """Boolean combination of filters and nested groups.

    Children keep the order they were added in.
    """

    op: str = AND
    filters: List[Any] = field(default_factory=list)

    def __post_init__(self):
        if self.op not in LOGICAL_OPS:
            raise ValueError(
                f"Filter group operator must be one of {sorted(LOGICAL_OPS)}, got {self.op!r}"
            )
        self.filters = list(self.filters)

    def add(self, filter: Filter) -> "FilterGroup":
        """Append a child filter and return this group."""
        self.filters.append(filter)
        return self

    def __len__(self) -> int:
        return len(self.filters)

    def to_json_object(self) -> Any:
        return {self.op: [to_json_object(f) for f in self.filters]}

    def to_json_str(self) -> str:
        return to_json_str(self)


__all__ = ["FieldFilter", "Filter", "FilterGroup", "Filterable"]
