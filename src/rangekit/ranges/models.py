from enum import Enum
from typing import Any, NamedTuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    model_validator,
)


class IntRange(NamedTuple):
    """Closed integer range; ``first`` may be greater than ``last``."""

    first: int
    last: int


class SortOrder(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class RangeOperation(str, Enum):
    CONGRUENT = "congruent"
    CONTIGUOUS = "contiguous"
    OVERLAPS = "overlaps"
    INTERSECTION = "intersection"
    UNION = "union"
    REVERSE = "reverse"
    SORT = "sort"
    CONTAINS = "contains"


UNARY_OPERATIONS = frozenset(
    {RangeOperation.REVERSE, RangeOperation.SORT, RangeOperation.CONTAINS}
)


class QueryTag(str, Enum):
    TYPICAL = "typical"
    BOUNDARY = "boundary"
    COVERAGE = "coverage"
    ADVERSARIAL = "adversarial"


_INT_RANGE_FIELDS = ("endpoint_range", "max_span_range")
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def _validate_no_bool_int_range_bounds(data: Any) -> None:
    if not isinstance(data, dict):
        return

    for field_name in _INT_RANGE_FIELDS:
        value = data.get(field_name)
        if not isinstance(value, (tuple, list)) or len(value) != 2:
            continue
        low, high = value
        if isinstance(low, bool) or isinstance(high, bool):
            raise ValueError(
                f"{field_name}: bool is not allowed for int range bounds"
            )


class RangeAxes(BaseModel):
    endpoint_range: tuple[int, int] = Field(default=(-20, 20))
    max_span_range: tuple[int, int] = Field(default=(0, 10))
    reversed_prob: float = Field(default=0.3, ge=0.0, le=1.0)
    degenerate_prob: float = Field(default=0.1, ge=0.0, le=1.0)
    n_typical: int = Field(default=4, ge=0, le=64)

    @model_validator(mode="before")
    @classmethod
    def validate_input_axes(cls, data: Any) -> Any:
        _validate_no_bool_int_range_bounds(data)
        return data

    @model_validator(mode="after")
    def validate_axes(self) -> "RangeAxes":
        for name in _INT_RANGE_FIELDS:
            lo, hi = getattr(self, name)
            if lo > hi:
                raise ValueError(f"{name}: low ({lo}) must be <= high ({hi})")

        if self.max_span_range[0] < 0:
            raise ValueError("max_span_range: low must be >= 0")
        if self.endpoint_range[0] < INT64_MIN:
            raise ValueError(f"endpoint_range: low must be >= {INT64_MIN}")
        if self.endpoint_range[1] > INT64_MAX:
            raise ValueError(f"endpoint_range: high must be <= {INT64_MAX}")
        return self


class RangeQuery(BaseModel):
    model_config = ConfigDict(extra="forbid")

    operation: RangeOperation = Field(description="Operation to apply")
    ranges: list[tuple[StrictInt, StrictInt]] = Field(
        description="Range arguments as [first, last] pairs"
    )
    order: SortOrder | None = Field(
        default=None, description="Sort order, only for sort"
    )
    value: StrictInt | None = Field(
        default=None, description="Value to test, only for contains"
    )
    tag: QueryTag = Field(
        default=QueryTag.TYPICAL, description="Query category for analysis"
    )

    @model_validator(mode="after")
    def validate_arguments(self) -> "RangeQuery":
        expected = 1 if self.operation in UNARY_OPERATIONS else 2
        if len(self.ranges) != expected:
            raise ValueError(
                f"{self.operation.value} takes {expected} range(s), "
                f"got {len(self.ranges)}"
            )
        if self.order is not None and self.operation != RangeOperation.SORT:
            raise ValueError("order is only allowed for sort")
        if self.operation == RangeOperation.CONTAINS:
            if self.value is None:
                raise ValueError("contains requires value")
        elif self.value is not None:
            raise ValueError("value is only allowed for contains")
        return self


class RangeQueryResult(RangeQuery):
    output: bool | tuple[int, int] | None = Field(
        description="Operation result; null when no range exists"
    )
