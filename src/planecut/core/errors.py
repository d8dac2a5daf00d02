"""Exception hierarchy for contour splitting.

Two categories are kept apart so callers can tell a malformed input from an
unexpected geometric configuration:

- ``ContourInputError``: the caller handed over something unusable (open
  contour, too few points, zero-length plane normal, non-planar points).
- ``SplitInvariantError``: the algorithm reached a state that a closed simple
  planar contour cannot produce (odd crossing count, failed edge/plane
  intersection, broken reconstruction walk).
"""

from __future__ import annotations


class SplitError(Exception):
    """Base class for all contour splitting failures."""


class ContourInputError(SplitError, ValueError):
    """The contour or plane supplied by the caller violates a precondition."""


class SplitInvariantError(SplitError, RuntimeError):
    """An internal consistency check failed while splitting."""
