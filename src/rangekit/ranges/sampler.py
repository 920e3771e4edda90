import random

from rangekit.ranges.models import IntRange, RangeAxes


def _sample_span(
    bounds: tuple[int, int],
    max_span_range: tuple[int, int],
    rng: random.Random,
) -> int:
    lo, hi = bounds
    span_hi = min(max_span_range[1], hi - lo)
    span_lo = min(max(1, max_span_range[0]), span_hi)
    if span_hi < 1:
        return 0
    return rng.randint(span_lo, span_hi)


def sample_range(
    axes: RangeAxes | None = None,
    rng: random.Random | None = None,
) -> IntRange:
    if axes is None:
        axes = RangeAxes()
    if rng is None:
        rng = random.Random()

    lo, hi = axes.endpoint_range
    if lo == hi or rng.random() < axes.degenerate_prob:
        point = rng.randint(lo, hi)
        return IntRange(point, point)

    span = _sample_span(axes.endpoint_range, axes.max_span_range, rng)
    start = rng.randint(lo, hi - span)
    end = start + span
    if start != end and rng.random() < axes.reversed_prob:
        start, end = end, start
    return IntRange(start, end)


def sample_range_pair(
    axes: RangeAxes | None = None,
    rng: random.Random | None = None,
) -> tuple[IntRange, IntRange]:
    if axes is None:
        axes = RangeAxes()
    if rng is None:
        rng = random.Random()
    return sample_range(axes, rng), sample_range(axes, rng)
