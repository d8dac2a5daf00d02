"""Adjacent duplicate point detection and removal for closed point sequences.

Duplicates are exact: two points match only when every coordinate compares
equal. The wrap-around pair (last, first) counts as adjacent.
"""

from __future__ import annotations

from typing import Sequence

from planecut.utils.geometry import Vec3


def find_adjacent_duplicate(points: Sequence[Vec3]) -> int | None:
    """Index of the first point equal to its predecessor, or None.

    Pairs are scanned as (last, first), (first, second), ... and the later
    point of the first matching pair is reported.
    """
    if len(points) < 2:
        return None
    for i in range(len(points)):
        if points[i - 1] == points[i]:
            return i
    return None


def drop_adjacent_duplicates(points: Sequence[Vec3]) -> tuple[list[Vec3], list[int]]:
    """Single scan that drops points equal to their predecessor.

    Returns the surviving points and the original indices that were dropped.
    A run of equal points collapses to one; a single point is never dropped.
    """
    kept: list[Vec3] = []
    kept_idx: list[int] = []
    dropped: list[int] = []
    for i, p in enumerate(points):
        if kept and kept[-1] == p:
            dropped.append(i)
            continue
        kept.append(p)
        kept_idx.append(i)

    # Wrap-around pair
    while len(kept) > 1 and kept[0] == kept[-1]:
        kept.pop()
        dropped.append(kept_idx.pop())

    return kept, sorted(dropped)
