"""Post-split sanity checks: polygon validity and area conservation.

Uses shapely as an independent polygon implementation, so a disagreement here
points at the split rather than at the area routine it is checking.
"""

from __future__ import annotations

import logging

import numpy as np

from planecut.contour.model import Contour
from planecut.utils.geometry import points_to_array

logger = logging.getLogger(__name__)


def piece_polygon(contour: Contour):
    """Shapely polygon from the XY projection of a closed contour."""
    from shapely.geometry import Polygon

    xy = points_to_array(contour.points)[:, :2]
    return Polygon(xy.tolist())


def verify_pieces(
    original: Contour,
    pieces: list[Contour],
    area_rtol: float,
    height_tolerance_percent: float = 0.1,
) -> list[str]:
    """Return human-readable problems found in ``pieces``; empty when all is well."""
    issues: list[str] = []

    for i, piece in enumerate(pieces):
        poly = piece_polygon(piece)
        if not poly.is_valid:
            from shapely.validation import explain_validity
            issues.append(f"piece {i} is not a simple polygon: {explain_validity(poly)}")
        if not piece.is_counter_clockwise(height_tolerance_percent):
            issues.append(f"piece {i} is not counter-clockwise")

    expected = abs(original.signed_area(height_tolerance_percent))
    actual = float(np.sum([abs(p.signed_area(height_tolerance_percent)) for p in pieces]))
    if not np.isclose(actual, expected, rtol=area_rtol, atol=0.0):
        issues.append(f"piece areas sum to {actual:.12g}, expected {expected:.12g}")

    return issues
