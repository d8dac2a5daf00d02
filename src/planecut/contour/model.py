"""Contour: an ordered, optionally closed sequence of 3D points.

Area, orientation and centroid are computed in the XY plane. Contours must sit
at a common height for those to be meaningful; points whose z departs from the
last point's z by more than ``height_tolerance_percent`` are rejected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from planecut.core.errors import ContourInputError
from planecut.utils.geometry import Plane, Vec3

from ._duplicates import drop_adjacent_duplicates

logger = logging.getLogger(__name__)

DEFAULT_HEIGHT_TOLERANCE_PERCENT = 0.1


def heights_match(z: float, ref: float, tolerance_percent: float) -> bool:
    if z == ref:
        return True
    if ref == 0.0:
        return False
    return abs((z - ref) / ref) * 100.0 <= tolerance_percent


def _signed_area_xy(points: Sequence[Vec3], tolerance_percent: float) -> float:
    """Green's theorem accumulation over the closed polygon ``points``.

    Each edge is integrated with whichever linear parametrisation (y of x, or
    x of y) has the smaller slope magnitude, which keeps near-vertical and
    near-horizontal edges stable.
    """
    if len(points) < 3:
        return 0.0

    area = 0.0
    ref_height = points[-1].z
    r_a = points[-1]
    for r_b in points:
        if not heights_match(r_a.z, ref_height, tolerance_percent):
            raise ContourInputError(
                f"Cannot compute area of a non-planar contour: found height {r_a.z} "
                f"where the contour height is {ref_height}"
            )
        n = r_b.y - r_a.y
        d = r_b.x - r_a.x

        if (n == 0.0 and d == 0.0) or r_a == r_b:
            logger.debug(f"Equal adjacent points {r_a} contribute no area")
        elif n == 0.0 or (d != 0.0 and abs(n) < abs(d)):
            m_1 = n / d
            b_1 = r_a.y - m_1 * r_a.x
            area += -0.5 * b_1 * (r_b.x - r_a.x)
        else:
            m_2 = d / n
            b_2 = r_a.x - m_2 * r_a.y
            area += 0.5 * b_2 * (r_b.y - r_a.y)
        r_a = r_b
    return area


def _mean(points: Sequence[Vec3]) -> Vec3:
    sx = sy = sz = 0.0
    for p in points:
        sx += p.x
        sy += p.y
        sz += p.z
    n = float(len(points))
    return Vec3(sx / n, sy / n, sz / n)


@dataclass
class Contour:
    """Polygon boundary as an ordered list of points.

    When ``closed`` is True the last point connects back to the first.
    ``metadata`` holds free-form string annotations carried onto split pieces.
    """

    points: list[Vec3] = field(default_factory=list)
    closed: bool = True
    metadata: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_coords(
        cls,
        coords: Iterable[Iterable[float]],
        closed: bool = True,
        metadata: dict[str, str] | None = None,
    ) -> Contour:
        return cls(
            points=[Vec3.from_iterable(c) for c in coords],
            closed=closed,
            metadata=dict(metadata or {}),
        )

    def __len__(self) -> int:
        return len(self.points)

    def copy(self) -> Contour:
        return Contour(points=list(self.points), closed=self.closed, metadata=dict(self.metadata))

    def to_coords(self) -> list[list[float]]:
        return [p.to_list() for p in self.points]

    # ── Orientation and area ──────────────────────────────────────────

    def signed_area(self, height_tolerance_percent: float = DEFAULT_HEIGHT_TOLERANCE_PERCENT) -> float:
        """Signed XY area, positive for counter-clockwise winding."""
        if not self.closed:
            raise ContourInputError(
                "Area of an open contour is not well-defined; mark closed contours as closed"
            )
        return _signed_area_xy(self.points, height_tolerance_percent)

    def is_counter_clockwise(self, height_tolerance_percent: float = DEFAULT_HEIGHT_TOLERANCE_PERCENT) -> bool:
        return self.signed_area(height_tolerance_percent) >= 0.0

    def reorient_counter_clockwise(
        self, height_tolerance_percent: float = DEFAULT_HEIGHT_TOLERANCE_PERCENT
    ) -> None:
        """Reverse the point order in place unless already counter-clockwise."""
        if not self.is_counter_clockwise(height_tolerance_percent):
            self.points.reverse()

    # ── Reference points ─────────────────────────────────────────────

    def average_point(self) -> Vec3:
        """Plain mean of the vertices."""
        if not self.points:
            raise ContourInputError("Cannot average a contour with no points")
        return _mean(self.points)

    def first_n_point_avg(self, n: int) -> Vec3:
        """Mean of the first ``n`` points."""
        if n <= 0 or n > len(self.points):
            raise ContourInputError(
                f"Cannot average N={n} points of a contour with {len(self.points)} points"
            )
        return _mean(self.points[:n])

    def centroid(self, height_tolerance_percent: float = DEFAULT_HEIGHT_TOLERANCE_PERCENT) -> Vec3:
        """Area-weighted centroid.

        The polygon is fanned into triangles around the average point; each
        triangle contributes its signed area and area-weighted center. Unlike
        the vertex average, the result stays meaningful for concave shapes.
        """
        if not self.points:
            raise ContourInputError("Cannot compute the centroid of a contour with no points")
        if len(self.points) < 3:
            return _mean(self.points)

        c = _mean(self.points)
        total_area = 0.0
        rx = ry = rz = 0.0
        a = self.points[-1]
        for b in self.points:
            tri = (c, a, b)
            area = _signed_area_xy(tri, height_tolerance_percent)
            center = _mean(tri)
            total_area += area
            rx += center.x * area
            ry += center.y * area
            rz += center.z * area
            a = b

        if total_area == 0.0:
            logger.debug("Contour encloses no area; centroid falls back to the average point")
            return c
        return Vec3(rx / total_area, ry / total_area, rz / total_area)

    def perimeter(self) -> float:
        """Total edge length, including the closing edge for closed contours."""
        if len(self.points) <= 1:
            return 0.0
        total = sum(a.distance(b) for a, b in zip(self.points, self.points[1:]))
        if self.closed:
            total += self.points[-1].distance(self.points[0])
        return total

    # ── Relation to a plane ──────────────────────────────────────────

    def avoids_plane(self, plane: Plane) -> int:
        """1 if every point is above or on ``plane``, -1 if below or on it, 0 otherwise.

        A contour touching the plane from one side still avoids it. A contour
        lying entirely in the plane, or with points on both sides, gives 0.
        """
        if not self.points:
            raise ContourInputError("Cannot relate a contour with no points to a plane")
        mirror = plane.flipped()
        above = below = False
        for p in self.points:
            if plane.is_above(p):
                above = True
            elif mirror.is_above(p):
                below = True
            if above and below:
                return 0
        if above:
            return 1
        if below:
            return -1
        return 0

    # ── Cleanup ──────────────────────────────────────────────────────

    def remove_adjacent_duplicates(self) -> Contour:
        """Copy with exactly-equal neighbouring points collapsed (wrap-around included)."""
        if self.closed:
            points, _ = drop_adjacent_duplicates(self.points)
        else:
            points = [p for i, p in enumerate(self.points) if i == 0 or p != self.points[i - 1]]
        return Contour(points=points, closed=self.closed, metadata=dict(self.metadata))
