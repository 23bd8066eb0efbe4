"""Parameter store: named, typed values serialized into a request.

Each slot in a :class:`ParameterStore` holds one of four value kinds,
and the kind decides how the value is rendered:

- :class:`Raw` - the value's plain string form (``limit=20``)
- :class:`JsonBlob` - compact JSON (``geo={"$circle":{...}}``)
- :class:`CommaJoinedSet` - distinct items joined by commas (``select=name,tel``)
- :class:`FilterList` - the request's row filters, under the reserved
  ``filters`` key

Slots holding the wrong kind for an operation are replaced with a fresh
value of the right kind rather than raising, so builders can write to a
key without checking what was there before.
"""

from __future__ import annotations

import copy as _copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union
from urllib.parse import quote_plus

from .constants import AND, FILTERS
from .errors import EncodingFailure
from .filters import Filter, Filterable, FilterGroup
from .jsonutil import to_json_object, to_json_str

logger = logging.getLogger(__name__)


@dataclass
class Raw:
    """Value rendered with its default string conversion."""

    value: Any

    def to_str(self) -> Optional[str]:
        if self.value is None:
            return None
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)

    def to_json_object(self) -> Optional[str]:
        return self.to_str()


@dataclass
class JsonBlob:
    """Value rendered as a JSON document (shapes, nested maps)."""

    value: Any

    def to_str(self) -> Optional[str]:
        return to_json_str(self.value)

    def to_json_object(self) -> Any:
        return to_json_object(self.value)


class CommaJoinedSet:
    """Distinct items rendered as ``a,b,c``.

    Items are distinct by their rendered form (``True`` renders as
    ``true``, so it never collapses with ``1``) and keep first-insertion
    order so output is stable; ``None`` is ignored.
    """

    def __init__(self, items: Iterable[Any] = ()):
        self._items: Dict[str, Any] = {}
        for item in items:
            self.add(item)

    def add(self, item: Any) -> None:
        rendered = Raw(item).to_str()
        if rendered is not None:
            self._items.setdefault(rendered, item)

    def items(self) -> List[Any]:
        return list(self._items.values())

    def __contains__(self, item: Any) -> bool:
        return Raw(item).to_str() in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommaJoinedSet):
            return NotImplemented
        return set(self._items) == set(other._items)

    def __repr__(self) -> str:
        return f"CommaJoinedSet({self.items()!r})"

    def to_str(self) -> Optional[str]:
        if not self._items:
            return None
        return ",".join(self._items)

    def to_json_object(self) -> Optional[str]:
        return self.to_str()


class FilterList(list):
    """Top-level row filters of a request, combined with an implicit AND.

    An empty list renders as absent, a single filter as itself, and
    several filters as one ``$and`` group.
    """

    def to_json_object(self) -> Any:
        if not self:
            return None
        if len(self) == 1:
            return to_json_object(self[0])
        return FilterGroup(op=AND, filters=list(self)).to_json_object()

    def to_str(self) -> Optional[str]:
        obj = self.to_json_object()
        if obj is None:
            return None
        return to_json_str(obj)


ParamValue = Union[Raw, JsonBlob, CommaJoinedSet, FilterList]


def url_pair(name: str, value: Optional[str], url_encode: bool) -> Optional[str]:
    """Format one ``name=value`` pair, or None when the value is absent.

    Raises:
        EncodingFailure: If the value cannot be encoded as UTF-8
    """
    if value is None:
        return None
    if url_encode:
        try:
            value = quote_plus(value, encoding="utf-8")
        except UnicodeEncodeError as e:
            raise EncodingFailure(name, value) from e
    return f"{name}={value}"


class ParameterStore:
    """Holds request parameters and renders them for transport.

    Examples:
        >>> params = ParameterStore()
        >>> params.set_raw("q", "coffee shop")
        >>> params.add_to_comma_set("select", "name")
        >>> params.to_query_string()
        'q=coffee+shop&select=name'
    """

    def __init__(self, params: Optional[Dict[str, ParamValue]] = None):
        self._params: Dict[str, ParamValue] = params if params is not None else {}

    def copy(self) -> "ParameterStore":
        """Return an independent copy.

        Filter lists, comma sets and JSON blobs are duplicated too, so
        mutating one copy's slots never shows up in the other.
        """
        return ParameterStore(_copy.deepcopy(self._params))

    def get(self, key: str) -> Optional[ParamValue]:
        return self._params.get(key)

    def has(self, key: str) -> bool:
        return key in self._params

    def __contains__(self, key: object) -> bool:
        return key in self._params

    def __len__(self) -> int:
        return len(self._params)

    def keys(self) -> List[str]:
        return list(self._params)

    def remove(self, key: str) -> None:
        self._params.pop(key, None)

    def _check_writable(self, key: str) -> None:
        if key == FILTERS:
            raise ValueError(
                f"'{FILTERS}' is reserved; use add_filter() to attach filters"
            )

    def set_raw(self, key: str, value: Any) -> None:
        """Set a parameter serialized with the value's string form."""
        self._check_writable(key)
        self._params[key] = Raw(value)

    def set_json(self, key: str, value: Any) -> None:
        """Set a parameter serialized as JSON."""
        self._check_writable(key)
        self._params[key] = JsonBlob(value)

    def add_to_comma_set(self, key: str, value: Any) -> None:
        """Add ``value`` to a comma-separated parameter such as ``select``."""
        self._check_writable(key)
        slot = self._params.get(key)
        if not isinstance(slot, CommaJoinedSet):
            if slot is not None:
                logger.debug("Replacing %s slot '%s' with a comma set", type(slot).__name__, key)
            slot = CommaJoinedSet()
            self._params[key] = slot
        slot.add(value)

    def get_comma_set(self, key: str) -> Optional[List[Any]]:
        slot = self._params.get(key)
        if not isinstance(slot, CommaJoinedSet):
            return None
        return slot.items()

    def merge_json_field(self, key: str, field_name: str, value: Any) -> None:
        """Set ``field_name`` on the JSON object stored at ``key``.

        Anything at ``key`` that is not a JSON object is discarded and
        replaced with an empty one first.
        """
        self._check_writable(key)
        slot = self._params.get(key)
        if not isinstance(slot, JsonBlob) or not isinstance(slot.value, dict):
            if slot is not None:
                logger.debug("Replacing %s slot '%s' with a JSON object", type(slot).__name__, key)
            slot = JsonBlob({})
            self._params[key] = slot
        slot.value[field_name] = value

    def get_filter_list(self) -> Optional[FilterList]:
        slot = self._params.get(FILTERS)
        if isinstance(slot, FilterList):
            return slot
        return None

    def add_filter(self, filter: Filter) -> None:
        """Append ``filter`` to this store's filter list."""
        filters = self.get_filter_list()
        if filters is None:
            filters = FilterList()
            self._params[FILTERS] = filters
        filters.append(filter)

    def pop_filters(self, op: str, sources: Iterable[Filterable]) -> FilterGroup:
        """Combine the newest filter of each source into one group.

        The last filter is popped from every source whose filter list is
        non-empty, in source order; the popped filters become the
        children of a new ``op`` group, which is then added to this
        store. Sources may include this store itself.

        Args:
            op: Group operator, ``$and`` or ``$or``
            sources: Stores or queries to pop from

        Returns:
            The group that was added
        """
        group = FilterGroup(op=op)
        for source in sources:
            filters = source.get_filter_list()
            if filters:
                group.add(filters.pop())
        logger.debug("Grouped %d filter(s) under %s", len(group), op)
        self.add_filter(group)
        return group

    def to_query_pairs(
        self, additional: Optional["ParameterStore"] = None, url_encode: bool = True
    ) -> List[str]:
        """Render ``name=value`` strings, skipping absent values."""
        pairs = []
        for key, slot in self._params.items():
            pair = url_pair(key, slot.to_str(), url_encode)
            if pair is not None:
                pairs.append(pair)
        if additional is not None:
            pairs.extend(additional.to_query_pairs(url_encode=url_encode))
        return pairs

    def to_query_string(
        self, additional: Optional["ParameterStore"] = None, url_encode: bool = True
    ) -> str:
        """Render as a URL query string (without the leading ``?``).

        Args:
            additional: Extra parameters appended after this store's own;
                duplicate keys are kept
            url_encode: Form-encode values

        Raises:
            EncodingFailure: If a value cannot be encoded
        """
        return "&".join(self.to_query_pairs(additional, url_encode))

    def to_flat_string_map(self) -> Dict[str, str]:
        """Map each key to its string form, e.g. for request headers."""
        flat = {}
        for key, slot in self._params.items():
            value = slot.to_str()
            if value is not None:
                flat[key] = value
        return flat

    def to_json_object(self) -> Dict[str, Any]:
        """Map each key to its JSON form, omitting absent values."""
        obj = {}
        for key, slot in self._params.items():
            value = slot.to_json_object()
            if value is not None:
                obj[key] = value
        return obj

    def __repr__(self) -> str:
        return f"ParameterStore({self._params!r})"


__all__ = [
    "CommaJoinedSet",
    "FilterList",
    "JsonBlob",
    "ParamValue",
    "ParameterStore",
    "Raw",
    "url_pair",
]
