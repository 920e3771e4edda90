"""ranges family: closed integer ranges with direction-agnostic bounds."""

from rangekit.ranges.errors import (
    InvalidOrderError,
    InvalidRangeError,
    RangeArgumentError,
)
from rangekit.ranges.models import (
    IntRange,
    QueryTag,
    RangeAxes,
    RangeOperation,
    RangeQuery,
    RangeQueryResult,
    SortOrder,
)
from rangekit.ranges.ops import (
    congruent,
    contains,
    contiguous,
    intersection,
    overlaps,
    reverse,
    sort,
    union,
)
from rangekit.ranges.queries import evaluate_query, generate_range_queries
from rangekit.ranges.sampler import sample_range, sample_range_pair

__all__ = [
    "IntRange",
    "InvalidOrderError",
    "InvalidRangeError",
    "QueryTag",
    "RangeArgumentError",
    "RangeAxes",
    "RangeOperation",
    "RangeQuery",
    "RangeQueryResult",
    "SortOrder",
    "congruent",
    "contains",
    "contiguous",
    "evaluate_query",
    "generate_range_queries",
    "intersection",
    "overlaps",
    "reverse",
    "sample_range",
    "sample_range_pair",
    "sort",
    "union",
]
