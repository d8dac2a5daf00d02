"""Pair crossing points that bound the same inside span of the cut line.

All crossings of a planar contour lie on one straight line (the cutting plane
meets the contour's plane in a line). Sorting them by distance from one
extreme crossing orders them along that line, and consecutive entries
(0,1), (2,3), ... are then the entry/exit pairs.
"""

from __future__ import annotations

from typing import Sequence

from planecut.core.errors import SplitInvariantError
from planecut.utils.geometry import Vec3


def order_along_cut(arena: Sequence[Vec3], crossing_ids: Sequence[int], centre: Vec3) -> list[int]:
    """Crossing ids sorted by distance from the crossing farthest from ``centre``."""
    redge_id = max(crossing_ids, key=lambda k: centre.distance(arena[k]))
    redge = arena[redge_id]
    return sorted(crossing_ids, key=lambda k: redge.distance(arena[k]))


def pair_crossings(
    arena: Sequence[Vec3],
    crossing_ids: Sequence[int],
    centre: Vec3,
) -> list[int | None]:
    """Symmetric partner table indexed by arena position.

    ``partner[i]`` is the arena index paired with crossing ``i``; entries for
    non-crossing points are None.
    """
    if len(crossing_ids) % 2 != 0:
        raise SplitInvariantError(
            f"Cannot pair an odd number of crossings ({len(crossing_ids)})"
        )

    partner: list[int | None] = [None] * len(arena)
    ordered = order_along_cut(arena, crossing_ids, centre)
    for a, b in zip(ordered[0::2], ordered[1::2]):
        partner[a] = b
        partner[b] = a
    return partner
