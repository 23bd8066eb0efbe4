"""Parsing helpers for CLI option values."""

from typing import Any, List, Tuple

from ..constants import FIELD_OPS
from ..shapes import Circle

# Operators whose argument is a list of values
LIST_OPS = frozenset({"$in", "$nin", "$bwin", "$nbwin"})


def infer_value_type(value: str) -> Any:
    """Infer the appropriate type for a filter value.

    Examples:
        >>> infer_value_type("123")
        123
        >>> infer_value_type("12.34")
        12.34
        >>> infer_value_type("true")
        True
        >>> infer_value_type("hello")
        'hello'
    """
    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value


def parse_operator(name: str) -> str:
    """Map a CLI operator name (``eq``, ``$eq``) to the API operator.

    Raises:
        ValueError: If the operator is unknown
    """
    op = name if name.startswith("$") else f"${name}"
    if op not in FIELD_OPS:
        known = ", ".join(sorted(o.lstrip("$") for o in FIELD_OPS))
        raise ValueError(f"Unknown operator '{name}' (expected one of: {known})")
    return op


def parse_filter(field: str, operator: str, value: str) -> Tuple[str, str, Any]:
    """Parse a ``--filter FIELD OP VALUE`` triple into typed parts.

    List operators split ``VALUE`` on commas.

    Examples:
        >>> parse_filter("rating", "gt", "3")
        ('rating', '$gt', 3)
        >>> parse_filter("region", "in", "CA,NY")
        ('region', '$in', ['CA', 'NY'])
    """
    op = parse_operator(operator)
    if op in LIST_OPS:
        arg: Any = [infer_value_type(v.strip()) for v in value.split(",") if v.strip()]
    else:
        arg = infer_value_type(value)
    return field, op, arg


def parse_circle(value: str) -> Circle:
    """Parse ``LAT,LONG,METERS`` into a Circle.

    Raises:
        ValueError: If the value is malformed or out of range
    """
    parts: List[str] = [p.strip() for p in value.split(",")]
    if len(parts) != 3:
        raise ValueError(f"Expected LAT,LONG,METERS, got '{value}'")
    lat, long, meters = parts
    return Circle(center_lat=float(lat), center_long=float(long), meters=int(meters))


def parse_sort(value: str) -> Tuple[str, bool]:
    """Parse ``FIELD`` or ``FIELD:asc|desc`` into (field, descending)."""
    if ":" in value:
        field, direction = value.rsplit(":", 1)
        direction = direction.lower()
        if direction not in ("asc", "desc"):
            raise ValueError(f"Sort direction must be asc or desc, got '{direction}'")
        return field, direction == "desc"
    return value, False
