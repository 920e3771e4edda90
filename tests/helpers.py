import random
from collections.abc import Iterator

from rangekit.ranges.models import IntRange


def covered(bounds: tuple[int, int]) -> frozenset[int]:
    """Integers covered by a closed range, by brute force."""
    lo, hi = min(bounds), max(bounds)
    return frozenset(range(lo, hi + 1))


def iter_ranges(lo: int, hi: int) -> Iterator[IntRange]:
    """Every range with both bounds in [lo, hi], in both directions."""
    for first in range(lo, hi + 1):
        for last in range(lo, hi + 1):
            yield IntRange(first, last)


def random_ranges(
    seed: int, count: int, lo: int = -12, hi: int = 12
) -> list[IntRange]:
    rng = random.Random(seed)
    return [
        IntRange(rng.randint(lo, hi), rng.randint(lo, hi))
        for _ in range(count)
    ]


def random_pairs(
    seed: int, count: int, lo: int = -12, hi: int = 12
) -> list[tuple[IntRange, IntRange]]:
    flat = random_ranges(seed, count * 2, lo, hi)
    return list(zip(flat[::2], flat[1::2], strict=True))
