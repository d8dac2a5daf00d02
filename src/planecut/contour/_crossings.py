"""Plane-crossing detection for closed point sequences.

Every edge whose endpoints fall on different sides of the plane gets its exact
crossing point computed and spliced into the boundary between the endpoints.
Points and crossings share one index arena: indices below ``num_original``
are the contour's own points, the rest are crossings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from planecut.core.errors import SplitInvariantError
from planecut.utils.geometry import Line, Plane, Vec3

logger = logging.getLogger(__name__)


@dataclass
class CrossingScan:
    """Result of scanning a closed boundary against a plane."""

    arena: list[Vec3]
    num_original: int
    sequence: list[int] = field(default_factory=list)
    first_crossing_pos: int | None = None

    @property
    def crossing_ids(self) -> list[int]:
        return list(range(self.num_original, len(self.arena)))

    @property
    def num_crossings(self) -> int:
        return len(self.arena) - self.num_original

    def is_crossing(self, idx: int) -> bool:
        return idx >= self.num_original

    def rotated_sequence(self) -> list[int]:
        """Boundary order starting at the first crossing, with it repeated at the end."""
        if self.first_crossing_pos is None:
            return list(self.sequence)
        k = self.first_crossing_pos
        rotated = self.sequence[k:] + self.sequence[:k]
        rotated.append(rotated[0])
        return rotated


def detect_crossings(points: Sequence[Vec3], plane: Plane) -> CrossingScan:
    """Find every edge crossing ``plane`` and splice the crossing points in.

    Edges are visited as (last, first), (first, second), ... so a crossing on
    the closing edge lands in front of the first point.
    """
    scan = CrossingScan(arena=list(points), num_original=len(points))
    above = [plane.is_above(p) for p in points]

    for i in range(len(points)):
        j = i - 1
        if above[j] != above[i]:
            crossing = plane.intersect_line_once(Line.from_points(points[j], points[i]))
            if crossing is None:
                raise SplitInvariantError(
                    f"Edge {points[j]} -> {points[i]} straddles the plane but no intersection "
                    "could be computed; the side test and the intersection disagree"
                )
            scan.arena.append(crossing)
            if scan.first_crossing_pos is None:
                scan.first_crossing_pos = len(scan.sequence)
            scan.sequence.append(len(scan.arena) - 1)
            logger.debug(f"Edge ({j}, {i}) crosses plane at {crossing}")
        scan.sequence.append(i)

    return scan
