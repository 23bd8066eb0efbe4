"""Fluent query builder for read requests.

Example:
    q = Query().search("coffee").limit(10)
    q.field("region").equal("CA")
    q.or_(q.field("name").begins_with("Star"), q.field("category").equal("cafe"))
    q.to_url_query()

The last call renders something like
``q=coffee&limit=10&filters=%7B%22%24and%22...``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from . import constants as c
from .filters import FieldFilter, Filter, Filterable
from .parameters import FilterList, ParameterStore
from .shapes import Circle, Shape


def _non_negative(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


class Query:
    """Builds the parameters of one read request.

    Builder methods return the query itself so calls can be chained.
    """

    def __init__(self, params: Optional[ParameterStore] = None):
        self.params = params if params is not None else ParameterStore()

    def search(self, text: str) -> "Query":
        """Full-text search across all fields."""
        self.params.set_raw(c.SEARCH, text)
        return self

    def limit(self, n: int) -> "Query":
        self.params.set_raw(c.LIMIT, _non_negative("limit", n))
        return self

    def offset(self, n: int) -> "Query":
        self.params.set_raw(c.OFFSET, _non_negative("offset", n))
        return self

    def only(self, *fields: str) -> "Query":
        """Restrict the returned fields."""
        for name in fields:
            self.params.add_to_comma_set(c.SELECT, name)
        return self

    def sort_asc(self, field_name: str) -> "Query":
        self.params.add_to_comma_set(c.SORT, f"{field_name}:asc")
        return self

    def sort_desc(self, field_name: str) -> "Query":
        self.params.add_to_comma_set(c.SORT, f"{field_name}:desc")
        return self

    def include_row_count(self, include: bool = True) -> "Query":
        self.params.set_raw(c.INCLUDE_COUNT, include)
        return self

    def threshold(self, level: str) -> "Query":
        self.params.set_raw(c.THRESHOLD, level)
        return self

    def within(self, shape: Shape) -> "Query":
        """Confine results to a geographic shape."""
        self.params.set_json(c.GEO, shape)
        return self

    def at(self, lat: float, long: float, meters: int) -> "Query":
        """Shorthand for ``within(Circle(...))``."""
        return self.within(Circle(center_lat=lat, center_long=long, meters=meters))

    def field(self, name: str) -> "FieldBuilder":
        """Start a filter on ``name``; the operator method adds it."""
        return FieldBuilder(self, name)

    def add(self, filter: Filter) -> "Query":
        self.params.add_filter(filter)
        return self

    def and_(self, *queries: Filterable) -> "Query":
        """AND together the newest filter of each query."""
        self.params.pop_filters(c.AND, queries)
        return self

    def or_(self, *queries: Filterable) -> "Query":
        """OR together the newest filter of each query."""
        self.params.pop_filters(c.OR, queries)
        return self

    def get_filter_list(self) -> Optional[FilterList]:
        return self.params.get_filter_list()

    def copy(self) -> "Query":
        return Query(self.params.copy())

    def to_url_query(
        self, additional: Optional[ParameterStore] = None, url_encode: bool = True
    ) -> str:
        return self.params.to_query_string(additional, url_encode)

    def to_json_object(self) -> Dict[str, Any]:
        return self.params.to_json_object()

    def __str__(self) -> str:
        return self.to_url_query(url_encode=False)

    def __repr__(self) -> str:
        return f"Query({self.params!r})"


class FieldBuilder:
    """Adds one field filter to a query.

    Each method appends a :class:`FieldFilter` and returns the query.
    """

    def __init__(self, query: Query, field_name: str):
        self.query = query
        self.field_name = field_name

    def _add(self, op: str, arg: Any) -> Query:
        return self.query.add(FieldFilter(op, self.field_name, arg))

    def equal(self, arg: Any) -> Query:
        return self._add(c.EQ, arg)

    def not_equal(self, arg: Any) -> Query:
        return self._add(c.NEQ, arg)

    def search(self, text: str) -> Query:
        """Full-text search on this field only."""
        return self._add(c.FULL_TEXT, text)

    def in_list(self, *args: Any) -> Query:
        return self._add(c.IN, list(args))

    def not_in_list(self, *args: Any) -> Query:
        return self._add(c.NIN, list(args))

    def begins_with(self, prefix: str) -> Query:
        return self._add(c.BEGINS_WITH, prefix)

    def not_begins_with(self, prefix: str) -> Query:
        return self._add(c.NOT_BEGINS_WITH, prefix)

    def begins_with_any(self, *prefixes: str) -> Query:
        return self._add(c.BEGINS_WITH_ANY, list(prefixes))

    def not_begins_with_any(self, *prefixes: str) -> Query:
        return self._add(c.NOT_BEGINS_WITH_ANY, list(prefixes))

    def blank(self) -> Query:
        return self._add(c.BLANK, True)

    def not_blank(self) -> Query:
        return self._add(c.BLANK, False)

    def greater_than(self, arg: Any) -> Query:
        return self._add(c.GT, arg)

    def greater_than_or_equal(self, arg: Any) -> Query:
        return self._add(c.GTE, arg)

    def less_than(self, arg: Any) -> Query:
        return self._add(c.LT, arg)

    def less_than_or_equal(self, arg: Any) -> Query:
        return self._add(c.LTE, arg)


__all__ = ["FieldBuilder", "Query"]
