"""Parameter keys and operator names understood by the read API."""

# Reserved key holding the filter list. Only written by ParameterStore.
FILTERS = "filters"

# Query parameter keys
SEARCH = "q"
LIMIT = "limit"
OFFSET = "offset"
SELECT = "select"
SORT = "sort"
INCLUDE_COUNT = "include_count"
GEO = "geo"
THRESHOLD = "threshold"

# Logical operators for filter groups
AND = "$and"
OR = "$or"
LOGICAL_OPS = frozenset({AND, OR})

# Field operators
EQ = "$eq"
NEQ = "$neq"
FULL_TEXT = "$search"
IN = "$in"
NIN = "$nin"
BEGINS_WITH = "$bw"
NOT_BEGINS_WITH = "$nbw"
BEGINS_WITH_ANY = "$bwin"
NOT_BEGINS_WITH_ANY = "$nbwin"
BLANK = "$blank"
GT = "$gt"
GTE = "$gte"
LT = "$lt"
LTE = "$lte"

FIELD_OPS = frozenset(
    {
        EQ,
        NEQ,
        FULL_TEXT,
        IN,
        NIN,
        BEGINS_WITH,
        NOT_BEGINS_WITH,
        BEGINS_WITH_ANY,
        NOT_BEGINS_WITH_ANY,
        BLANK,
        GT,
        GTE,
        LT,
        LTE,
    }
)

# Geo shape keys
CIRCLE = "$circle"
CENTER = "$center"
METERS = "$meters"
