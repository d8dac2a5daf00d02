"""Visualization utilities for inspecting splits."""

from __future__ import annotations

from pathlib import Path

import numpy as np

from planecut.contour.model import Contour
from planecut.utils.geometry import Plane, points_to_array


def _closed_xy(contour: Contour) -> np.ndarray:
    xy = points_to_array(contour.points)[:, :2]
    if contour.closed and len(xy) > 0:
        xy = np.vstack([xy, xy[:1]])
    return xy


def plot_split(
    contour: Contour,
    pieces: list[Contour],
    plane: Plane | None = None,
    title: str = "Contour Split",
    save_path: Path | None = None,
):
    """Plot the input contour (dashed), its pieces (filled), and the cut line in XY."""
    import matplotlib

    if save_path:
        matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(8, 8))

    xy = _closed_xy(contour)
    ax.plot(xy[:, 0], xy[:, 1], "k--", linewidth=1.0, label="input")

    cmap = plt.get_cmap("tab10")
    for i, piece in enumerate(pieces):
        pxy = _closed_xy(piece)
        ax.fill(pxy[:, 0], pxy[:, 1], color=cmap(i % 10), alpha=0.35)
        ax.plot(pxy[:, 0], pxy[:, 1], color=cmap(i % 10), linewidth=1.5, label=f"piece {i}")

    # Cut line where the plane meets the contour plane, across the bounding box
    if plane is not None and len(xy) > 0:
        n = plane.normal
        if n.x != 0.0 or n.y != 0.0:
            lo, hi = xy.min(axis=0), xy.max(axis=0)
            pad = 0.1 * float(np.max(hi - lo) or 1.0)
            z = contour.points[0].z
            # n.x*x + n.y*y = n . r0 - n.z*z
            rhs = plane.normal.dot(plane.point) - n.z * z
            if abs(n.y) > abs(n.x):
                xs = np.array([lo[0] - pad, hi[0] + pad])
                ys = (rhs - n.x * xs) / n.y
            else:
                ys = np.array([lo[1] - pad, hi[1] + pad])
                xs = (rhs - n.y * ys) / n.x
            ax.plot(xs, ys, "r-", linewidth=1.0, label="cut")

    ax.set_title(title)
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.set_aspect("equal", adjustable="datalim")
    ax.legend(loc="best", fontsize="small")

    if save_path:
        fig.savefig(str(save_path), dpi=150, bbox_inches="tight")
    else:
        plt.show()
    plt.close(fig)
    return fig
