"""placequery: query parameters and filters for a place-search read API."""

from .constants import AND, FILTERS, OR
from .errors import ConfigError, EncodingFailure, PlaceQueryError
from .filters import FieldFilter, Filter, Filterable, FilterGroup
from .parameters import CommaJoinedSet, FilterList, JsonBlob, ParameterStore, Raw
from .query import FieldBuilder, Query
from .shapes import Circle, Shape

__all__ = [
    "AND",
    "Circle",
    "CommaJoinedSet",
    "ConfigError",
    "EncodingFailure",
    "FILTERS",
    "FieldBuilder",
    "FieldFilter",
    "Filter",
    "FilterGroup",
    "FilterList",
    "Filterable",
    "JsonBlob",
    "OR",
    "ParameterStore",
    "PlaceQueryError",
    "Query",
    "Raw",
    "Shape",
    "__version__",
]

__version__ = "0.1.0"
