"""Shared pytest fixtures for planecut tests."""

import json
from pathlib import Path

import pytest

from planecut.contour.model import Contour
from planecut.utils.geometry import Plane, Vec3


SQUARE = [[0.0, 0.0, 0.0], [4.0, 0.0, 0.0], [4.0, 4.0, 0.0], [0.0, 4.0, 0.0]]

# U shape opening upward: 6 wide, 4 tall, with a 2x3 notch cut from the top middle
U_SHAPE = [
    [0.0, 0.0, 0.0], [6.0, 0.0, 0.0], [6.0, 4.0, 0.0], [4.0, 4.0, 0.0],
    [4.0, 1.0, 0.0], [2.0, 1.0, 0.0], [2.0, 4.0, 0.0], [0.0, 4.0, 0.0],
]


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Create a temporary data root with standard directory structure."""
    for subdir in ["raw", "interim/s01_import_contour", "processed"]:
        (tmp_path / subdir).mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture
def square() -> Contour:
    """4x4 counter-clockwise square at z=0."""
    return Contour.from_coords(SQUARE)


@pytest.fixture
def u_shape() -> Contour:
    return Contour.from_coords(U_SHAPE)


@pytest.fixture
def plane_x2() -> Plane:
    """Plane x = 2 with +x as the "above" side."""
    return Plane(normal=Vec3(1.0, 0.0, 0.0), point=Vec3(2.0, 0.0, 0.0))


@pytest.fixture
def sample_contour_json(data_root: Path) -> Path:
    """Square contour in the JSON layout read by the import step."""
    path = data_root / "raw" / "contour.json"
    with open(path, "w") as f:
        json.dump({"points": SQUARE, "closed": True, "metadata": {"name": "square"}}, f)
    return path


@pytest.fixture
def sample_contour_csv(data_root: Path) -> Path:
    """Clockwise square as x,y,z rows with a comment header."""
    path = data_root / "raw" / "contour.csv"
    rows = ["# x,y,z"] + [",".join(str(v) for v in p) for p in reversed(SQUARE)]
    path.write_text("\n".join(rows) + "\n")
    return path
