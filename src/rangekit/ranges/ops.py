import logging
from typing import Any

from rangekit.ranges.errors import InvalidOrderError, InvalidRangeError
from rangekit.ranges.models import IntRange, SortOrder

_LOGGER = logging.getLogger(__name__)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_range(value: Any, argument: str) -> IntRange:
    if (
        isinstance(value, tuple)
        and len(value) == 2
        and _is_int(value[0])
        and _is_int(value[1])
    ):
        return IntRange(value[0], value[1])
    _LOGGER.debug("rejected %s=%r: not a two-int range", argument, value)
    raise InvalidRangeError(argument=argument, value=value)


def _normalize(bounds: IntRange) -> IntRange:
    if bounds.first > bounds.last:
        return IntRange(bounds.last, bounds.first)
    return bounds


def _covers(bounds: IntRange, value: int) -> bool:
    lo, hi = _normalize(bounds)
    return lo <= value <= hi


def _same_bounds(r1: IntRange, r2: IntRange) -> bool:
    return (r1.first == r2.first and r1.last == r2.last) or (
        r1.first == r2.last and r1.last == r2.first
    )


def contains(range1: Any, value: Any) -> bool:
    """Return True if ``value`` lies within ``range1``, in either direction."""
    r1 = _as_range(range1, "range1")
    if not _is_int(value):
        raise InvalidRangeError(argument="value", value=value, expected="int")
    return _covers(r1, value)


def congruent(range1: Any, range2: Any) -> bool:
    """Return True if both ranges have the same bounds, in any order.

    >>> congruent((1, 5), (5, 1))
    True
    >>> congruent((1, 5), (2, 5))
    False
    """
    r1 = _as_range(range1, "range1")
    r2 = _as_range(range2, "range2")
    return _same_bounds(r1, r2)


def overlaps(range1: Any, range2: Any) -> bool:
    """Return True if the ranges share at least one integer."""
    r1 = _as_range(range1, "range1")
    r2 = _as_range(range2, "range2")
    return (
        _covers(r2, r1.first)
        or _covers(r2, r1.last)
        or _covers(r1, r2.first)
    )


def contiguous(range1: Any, range2: Any) -> bool:
    """Return True if the ranges are adjacent with no gap and no overlap.

    Direction is ignored: ``(1, 3)`` and ``(4, 6)`` are contiguous, and so
    are ``(3, 1)`` and ``(4, 6)``.
    """
    a, b = _normalize(_as_range(range1, "range1"))
    x, y = _normalize(_as_range(range2, "range2"))
    return b + 1 == x or y + 1 == a


def intersection(range1: Any, range2: Any) -> IntRange | None:
    """Return the span shared by both ranges, or None.

    The result is always ascending.

    >>> intersection((1, 5), (4, 8))
    IntRange(first=4, last=5)
    >>> intersection((1, 5), (6, 8)) is None
    True
    """
    r1 = _as_range(range1, "range1")
    r2 = _as_range(range2, "range2")
    if _same_bounds(r1, r2):
        return _normalize(r1)
    if not overlaps(r1, r2):
        return None
    a, b = _normalize(r1)
    x, y = _normalize(r2)
    return IntRange(max(a, x), min(b, y))


def union(range1: Any, range2: Any) -> IntRange | None:
    """Return the smallest range covering both, or None.

    Only overlapping or contiguous ranges have a union. The result is always
    ascending.

    >>> union((1, 3), (4, 6))
    IntRange(first=1, last=6)
    >>> union((1, 4), (6, 8)) is None
    True
    """
    r1 = _as_range(range1, "range1")
    r2 = _as_range(range2, "range2")
    if _same_bounds(r1, r2):
        return _normalize(r1)
    if not (overlaps(r1, r2) or contiguous(r1, r2)):
        return None
    a, b = _normalize(r1)
    x, y = _normalize(r2)
    return IntRange(min(a, x), max(b, y))


def reverse(range1: Any) -> IntRange:
    """Swap the first and last bounds."""
    first, last = _as_range(range1, "range1")
    return IntRange(last, first)


def sort(range1: Any, order: Any = SortOrder.ASCENDING) -> IntRange:
    """Order the bounds of ``range1`` by ``order``.

    ``order`` must be a ``SortOrder`` member; plain strings are rejected.

    >>> sort((10, 0))
    IntRange(first=0, last=10)
    >>> sort((0, 10), SortOrder.DESCENDING)
    IntRange(first=10, last=0)
    """
    r1 = _as_range(range1, "range1")
    if not isinstance(order, SortOrder):
        _LOGGER.debug("rejected order=%r", order)
        raise InvalidOrderError(order)

    first, last = r1
    if order == SortOrder.ASCENDING and first > last:
        return IntRange(last, first)
    if order == SortOrder.DESCENDING and last > first:
        return IntRange(last, first)
    return r1
