import random
from collections.abc import Callable
from typing import Any

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
from rangekit.ranges.sampler import sample_range, sample_range_pair

Pair = tuple[tuple[int, int], tuple[int, int]]

_BINARY_OPS: dict[RangeOperation, Callable[[Any, Any], Any]] = {
    RangeOperation.CONGRUENT: congruent,
    RangeOperation.CONTIGUOUS: contiguous,
    RangeOperation.OVERLAPS: overlaps,
    RangeOperation.INTERSECTION: intersection,
    RangeOperation.UNION: union,
}


def evaluate_query(query: RangeQuery) -> RangeQueryResult:
    ranges = [IntRange(first, last) for first, last in query.ranges]
    binary_op = _BINARY_OPS.get(query.operation)
    if binary_op is not None:
        output = binary_op(ranges[0], ranges[1])
    elif query.operation == RangeOperation.REVERSE:
        output = reverse(ranges[0])
    elif query.operation == RangeOperation.SORT:
        output = sort(ranges[0], query.order or SortOrder.ASCENDING)
    else:
        output = contains(ranges[0], query.value)
    return RangeQueryResult.model_validate(
        {**query.model_dump(), "output": output}
    )


def _clamp(value: int, lo: int, hi: int) -> int:
    return min(max(value, lo), hi)


def _clamp_pair(pair: Pair, lo: int, hi: int) -> Pair:
    (a, b), (x, y) = pair
    return (
        (_clamp(a, lo, hi), _clamp(b, lo, hi)),
        (_clamp(x, lo, hi), _clamp(y, lo, hi)),
    )


def _binary_cases(
    axes: RangeAxes, rng: random.Random
) -> list[tuple[Pair, QueryTag]]:
    lo, hi = axes.endpoint_range
    mid = (lo + hi) // 2

    cases: list[tuple[Pair, QueryTag]] = []
    for pair in (
        ((mid, mid), (mid, mid)),
        ((lo, hi), (hi, lo)),
        ((lo, lo), (hi, hi)),
    ):
        cases.append((pair, QueryTag.BOUNDARY))
    for pair in (
        ((lo, mid), (mid + 1, hi)),
        ((lo, mid), (mid, hi)),
        ((lo, lo + 1), (lo + 3, lo + 4)),
    ):
        cases.append((pair, QueryTag.COVERAGE))
    for _ in range(axes.n_typical):
        first, second = sample_range_pair(axes, rng)
        cases.append(((tuple(first), tuple(second)), QueryTag.TYPICAL))
    for pair in (
        ((mid, lo), (hi, mid + 1)),
        ((hi, mid), (mid, lo)),
        ((lo, mid - 1), (mid + 1, hi)),
    ):
        cases.append((pair, QueryTag.ADVERSARIAL))
    return [(_clamp_pair(pair, lo, hi), tag) for pair, tag in cases]


def _unary_cases(
    axes: RangeAxes, rng: random.Random
) -> list[tuple[tuple[int, int], QueryTag]]:
    lo, hi = axes.endpoint_range
    mid = (lo + hi) // 2

    cases: list[tuple[tuple[int, int], QueryTag]] = [
        ((mid, mid), QueryTag.BOUNDARY),
        ((lo, hi), QueryTag.BOUNDARY),
        ((hi, lo), QueryTag.BOUNDARY),
        ((lo, mid), QueryTag.COVERAGE),
        ((hi, mid), QueryTag.COVERAGE),
    ]
    for _ in range(axes.n_typical):
        cases.append((tuple(sample_range(axes, rng)), QueryTag.TYPICAL))
    cases.append(((mid + 1, mid), QueryTag.ADVERSARIAL))
    return [
        ((_clamp(a, lo, hi), _clamp(b, lo, hi)), tag) for (a, b), tag in cases
    ]


def generate_range_queries(
    axes: RangeAxes | None = None,
    rng: random.Random | None = None,
) -> list[RangeQueryResult]:
    if axes is None:
        axes = RangeAxes()
    if rng is None:
        rng = random.Random()

    queries: list[RangeQueryResult] = []

    def _append(tag: QueryTag, **kwargs: Any) -> None:
        queries.append(evaluate_query(RangeQuery(tag=tag, **kwargs)))

    for operation in _BINARY_OPS:
        for (first, second), tag in _binary_cases(axes, rng):
            _append(tag, operation=operation, ranges=[first, second])

    for bounds, tag in _unary_cases(axes, rng):
        _append(tag, operation=RangeOperation.REVERSE, ranges=[bounds])
        for order in SortOrder:
            _append(
                tag,
                operation=RangeOperation.SORT,
                ranges=[bounds],
                order=order,
            )
        lo, hi = sorted(bounds)
        for candidate in (lo - 1, lo, (lo + hi) // 2, hi, hi + 1):
            _append(
                tag,
                operation=RangeOperation.CONTAINS,
                ranges=[bounds],
                value=candidate,
            )

    deduped: list[RangeQueryResult] = []
    for tag in QueryTag:
        seen: set[tuple[Any, ...]] = set()
        for query in queries:
            if query.tag != tag:
                continue
            key = (
                query.operation,
                tuple(query.ranges),
                query.order,
                query.value,
            )
            if key in seen:
                continue
            seen.add(key)
            deduped.append(query)

    return deduped
