"""3D geometry primitives: vectors, lines, planes.

Points compare with exact float equality. The splitting code relies on this
to recognise "the same point" only when two values are literally identical,
so nothing here rounds or snaps coordinates.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Vec3:
    """Immutable 3D point / vector."""

    x: float
    y: float
    z: float

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> Vec3:
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, s: float) -> Vec3:
        return Vec3(self.x * s, self.y * s, self.z * s)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> Vec3:
        return Vec3(self.x / s, self.y / s, self.z / s)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def unit(self) -> Vec3:
        """Unit vector in the same direction. Raises ZeroDivisionError for the zero vector."""
        return self / self.length()

    def distance(self, other: Vec3) -> float:
        return (self - other).length()

    def to_list(self) -> list[float]:
        return [self.x, self.y, self.z]

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)


def points_to_array(points: Iterable[Vec3]) -> np.ndarray:
    """Stack points into an (N, 3) float64 array."""
    arr = np.array([p.to_list() for p in points], dtype=np.float64)
    return arr.reshape(-1, 3)


def array_to_points(arr: np.ndarray) -> list[Vec3]:
    """Convert an (N, 3) array into a list of Vec3."""
    arr = np.asarray(arr, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Expected (N, 3) array, got shape {arr.shape}")
    return [Vec3(float(x), float(y), float(z)) for x, y, z in arr.tolist()]


@dataclass(frozen=True)
class Line:
    """Infinite line through ``origin`` along the unit direction ``direction``."""

    origin: Vec3
    direction: Vec3

    @classmethod
    def from_points(cls, a: Vec3, b: Vec3) -> Line:
        """Line through two distinct points, directed from ``a`` to ``b``."""
        return cls(a, (b - a).unit())

    def point_at(self, t: float) -> Vec3:
        return self.origin + self.direction * t

    def intersect_once(self, other: Line, coplanar_tol: float = 1e-9) -> Vec3 | None:
        """Single intersection point with another line.

        Returns None for parallel, coincident, or skew lines.
        """
        c = self.direction.cross(other.direction)
        c_len_sq = c.dot(c)
        if c_len_sq == 0.0 or not math.isfinite(1.0 / c_len_sq):
            return None

        w = other.origin - self.origin
        # Skew lines never meet
        if abs(w.dot(c)) > coplanar_tol * max(w.length(), 1.0) * math.sqrt(c_len_sq):
            return None

        t = w.cross(other.direction).dot(c) / c_len_sq
        return self.point_at(t)


@dataclass(frozen=True)
class Plane:
    """Plane with normal ``normal`` passing through ``point``.

    The normal need not be unit length. "Above" is the side the normal points to.
    """

    normal: Vec3
    point: Vec3

    def is_degenerate(self) -> bool:
        n_len = self.normal.length()
        return n_len == 0.0 or not math.isfinite(n_len)

    def signed_distance(self, p: Vec3) -> float:
        return self.normal.dot(p - self.point) / self.normal.length()

    def is_above(self, p: Vec3) -> bool:
        """Strictly above: points exactly on the plane are not above."""
        return self.signed_distance(p) > 0.0

    def flipped(self) -> Plane:
        """Same plane with the opposite "above" side."""
        return Plane(normal=-self.normal, point=self.point)

    def side_of(self, p: Vec3) -> str:
        return "above" if self.is_above(p) else "below"

    def intersect_line_once(self, line: Line) -> Vec3 | None:
        """Point where ``line`` meets the plane.

        Returns None when the line is parallel to the plane (no intersection or
        lying inside the plane).
        """
        denom = self.normal.dot(line.direction)
        if denom == 0.0 or not math.isfinite(1.0 / denom):
            return None
        numer = self.normal.dot(line.origin - self.point)
        return line.origin - line.direction * (numer / denom)
