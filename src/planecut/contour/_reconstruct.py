"""Rebuild closed pieces from a boundary with paired crossings spliced in.

The walk runs over the rotated node sequence (first crossing first, and
repeated at the end). Normal points are emitted and consumed in boundary
order; reaching a crossing emits it and jumps to its partner. A piece closes
when the jump lands on the crossing that preceded the piece's first point.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Sequence

from planecut.core.errors import SplitInvariantError
from planecut.utils.geometry import Vec3

logger = logging.getLogger(__name__)


class WalkState(Enum):
    SEEKING_START = auto()
    WALKING = auto()
    CONTOUR_COMPLETE = auto()
    DONE = auto()


def _first_live_normal(sequence: Sequence[int], num_original: int, consumed: list[bool]) -> int | None:
    for pos, idx in enumerate(sequence):
        if idx < num_original and not consumed[pos]:
            return pos
    return None


def _preceding_crossing(sequence: Sequence[int], num_original: int, start: int) -> int:
    # Everything before the first live normal is a crossing or already consumed
    pos = start - 1
    while pos >= 0 and sequence[pos] < num_original:
        pos -= 1
    if pos < 0:
        raise SplitInvariantError("No crossing precedes the start of a piece")
    return pos


def walk_pieces(
    arena: Sequence[Vec3],
    num_original: int,
    sequence: Sequence[int],
    partner: Sequence[int | None],
) -> list[list[Vec3]]:
    """Run the reconstruction state machine and return raw piece point lists."""
    first_pos: dict[int, int] = {}
    for pos, idx in enumerate(sequence):
        first_pos.setdefault(idx, pos)

    consumed = [False] * len(sequence)
    remaining = sum(1 for idx in sequence if idx < num_original)
    max_steps = len(sequence) * len(sequence) + 1
    steps = 0

    pieces: list[list[Vec3]] = []
    current: list[Vec3] = []
    beginning = cursor = 0
    state = WalkState.SEEKING_START

    while True:
        if state is WalkState.SEEKING_START:
            start = _first_live_normal(sequence, num_original, consumed)
            if start is None:
                raise SplitInvariantError("Ran out of non-intersection points before completing contour")
            beginning = _preceding_crossing(sequence, num_original, start)
            cursor = start
            current = []
            state = WalkState.WALKING

        elif state is WalkState.WALKING:
            steps += 1
            if steps > max_steps:
                raise SplitInvariantError("Contour walk did not close; crossings may be mispaired")
            if cursor >= len(sequence):
                raise SplitInvariantError("Ran out of points during contour generation")
            if cursor == beginning:
                raise SplitInvariantError("Walk looped back to its start without closing the piece")

            idx = sequence[cursor]
            if idx < num_original:
                if not consumed[cursor]:
                    current.append(arena[idx])
                    consumed[cursor] = True
                    remaining -= 1
                cursor += 1
                continue

            current.append(arena[idx])
            mate = partner[idx]
            if mate is None:
                raise SplitInvariantError(f"Crossing {arena[idx]} has no partner")
            jump = first_pos.get(mate)
            if jump is None:
                raise SplitInvariantError(f"Partner crossing {arena[mate]} is not on the boundary")

            if jump == beginning:
                current.append(arena[sequence[beginning]])
                pieces.append(current)
                state = WalkState.CONTOUR_COMPLETE
            else:
                current.append(arena[mate])
                cursor = jump + 1

        elif state is WalkState.CONTOUR_COMPLETE:
            logger.debug(f"Closed piece {len(pieces)} with {len(current)} points")
            state = WalkState.SEEKING_START if remaining > 0 else WalkState.DONE

        else:
            return pieces
