"""Split a closed planar contour along a cutting plane.

Stages:
1. Repair: drop exactly-duplicated neighbouring points from a working copy,
   one at a time, rescanning after each removal.
2. Detect: find every edge crossing the plane and splice the crossing in.
3. Pair: order crossings along the cut line and pair them (0,1), (2,3), ...
4. Walk: rebuild closed pieces by following the boundary and jumping between
   paired crossings.
5. Finish: drop duplicates the splice introduced and orient every piece
   counter-clockwise.

The caller's contour is never modified.
"""

from __future__ import annotations

import logging

from planecut.core.errors import ContourInputError, SplitInvariantError
from planecut.utils.geometry import Plane, Vec3

from ._crossings import detect_crossings
from ._duplicates import drop_adjacent_duplicates, find_adjacent_duplicate
from ._pairing import pair_crossings
from ._reconstruct import walk_pieces
from .model import DEFAULT_HEIGHT_TOLERANCE_PERCENT, Contour, heights_match

logger = logging.getLogger(__name__)


def _check_preconditions(contour: Contour, plane: Plane, height_tolerance_percent: float) -> None:
    if not contour.closed:
        raise ContourInputError("Only closed contours can be split along a plane")
    if len(contour.points) < 3:
        raise ContourInputError(f"Contour has {len(contour.points)} points; at least 3 are needed to split")
    if plane.is_degenerate():
        raise ContourInputError(f"Cutting plane normal {plane.normal} has zero length")

    ref = contour.points[-1].z
    for p in contour.points:
        if not heights_match(p.z, ref, height_tolerance_percent):
            raise ContourInputError(
                f"Contour is not planar: point {p} departs from contour height {ref}"
            )


def _repair_duplicates(points: list[Vec3]) -> list[Vec3]:
    working = list(points)
    while True:
        dup = find_adjacent_duplicate(working)
        if dup is None:
            return working
        logger.warning(
            f"Found an adjacent duplicated point {working[dup]} at position {dup} in input contour; removing it"
        )
        del working[dup]
        if len(working) < 3:
            raise ContourInputError(
                "Contour has fewer than 3 distinct points after removing adjacent duplicates"
            )


def _lies_on_plane(points: list[Vec3], plane: Plane) -> bool:
    return all(plane.signed_distance(p) == 0.0 for p in points)


def _finish_piece(
    points: list[Vec3], template: Contour, piece_no: int, height_tolerance_percent: float
) -> Contour:
    kept, dropped = drop_adjacent_duplicates(points)
    if dropped:
        logger.warning(
            f"Removed adjacent duplicated points #{dropped} from split piece {piece_no}"
        )
    if len(kept) < 3:
        raise SplitInvariantError(
            f"Split piece {piece_no} has fewer than 3 points after removing duplicates"
        )
    piece = Contour(points=kept, closed=True, metadata=dict(template.metadata))
    piece.reorient_counter_clockwise(height_tolerance_percent)
    return piece


def split_along_plane(
    contour: Contour,
    plane: Plane,
    *,
    height_tolerance_percent: float = DEFAULT_HEIGHT_TOLERANCE_PERCENT,
) -> list[Contour]:
    """Split ``contour`` into the closed pieces produced by cutting it with ``plane``.

    Args:
        contour: Closed contour with at least 3 points at a common height.
        plane: Cutting plane; its normal must be non-zero.
        height_tolerance_percent: Allowed relative spread of point heights.

    Returns:
        One or more closed, counter-clockwise contours. A contour that does
        not cross the plane comes back as a single piece.

    Raises:
        ContourInputError: The contour or plane violates a precondition.
        SplitInvariantError: The geometry produced an impossible configuration
            (odd crossing count, failed intersection, broken walk).
    """
    _check_preconditions(contour, plane, height_tolerance_percent)

    working = contour.copy()
    working.points = _repair_duplicates(contour.points)

    scan = detect_crossings(working.points, plane)
    logger.debug(f"{scan.num_crossings} plane crossings in {len(working.points)}-point contour")

    if scan.num_crossings == 0:
        working.reorient_counter_clockwise(height_tolerance_percent)
        return [working]
    if scan.num_crossings % 2 != 0:
        raise SplitInvariantError(
            f"Generated an odd number of plane crossings ({scan.num_crossings}); "
            "a closed, non-overlapping contour always crosses a plane an even number of times"
        )

    partner = pair_crossings(scan.arena, scan.crossing_ids, working.centroid(height_tolerance_percent))
    raw_pieces = walk_pieces(scan.arena, scan.num_original, scan.rotated_sequence(), partner)

    pieces = []
    for i, points in enumerate(raw_pieces):
        # Boundary points sitting exactly on the plane yield zero-area slivers along the cut
        if _lies_on_plane(points, plane):
            logger.debug(f"Dropping piece {i}: all of its points lie on the cutting plane")
            continue
        pieces.append(_finish_piece(points, working, i, height_tolerance_percent))
    if not pieces:
        raise SplitInvariantError("Every split piece collapsed onto the cutting plane")
    logger.debug(f"Split produced {len(pieces)} pieces")
    return pieces


def piece_side(
    piece: Contour,
    plane: Plane,
    height_tolerance_percent: float = DEFAULT_HEIGHT_TOLERANCE_PERCENT,
) -> str:
    """"above" or "below": the side of ``plane`` a split piece lies on.

    Pieces touch the cut, so points on the plane are ignored. A contour that
    still straddles the plane is labelled by its centroid.
    """
    side = piece.avoids_plane(plane)
    if side == 0:
        return plane.side_of(piece.centroid(height_tolerance_percent))
    return "above" if side > 0 else "below"
