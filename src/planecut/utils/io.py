"""I/O utilities: contour JSON/CSV readers and writers."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import numpy as np

from planecut.contour.model import Contour
from planecut.core.contracts import ContourRecord, PieceRecord, StepMeta
from planecut.utils.geometry import array_to_points

logger = logging.getLogger(__name__)


# ── Contour <-> record ───────────────────────────────────────────────

def contour_to_record(contour: Contour) -> ContourRecord:
    return ContourRecord(
        points=contour.to_coords(),
        closed=contour.closed,
        metadata=dict(contour.metadata),
    )


def record_to_contour(record: ContourRecord) -> Contour:
    for i, p in enumerate(record.points):
        if len(p) != 3:
            raise ValueError(f"Point #{i} has {len(p)} coordinates, expected 3")
    return Contour.from_coords(record.points, closed=record.closed, metadata=record.metadata)


# ── Readers ──────────────────────────────────────────────────────────

def read_contour_json(path: Path) -> Contour:
    """Read a contour from ``{"points": [[x, y, z], ...], "closed": ..., "metadata": {...}}``."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    return record_to_contour(ContourRecord(**raw))


def read_contour_csv(path: Path, closed: bool = True) -> Contour:
    """Read a contour from ``x,y,z`` rows. Lines starting with '#' are skipped."""
    arr = np.loadtxt(str(path), delimiter=",", dtype=np.float64, comments="#", ndmin=2)
    if arr.size == 0:
        return Contour(points=[], closed=closed, metadata={"source": Path(path).name})
    return Contour(points=array_to_points(arr), closed=closed, metadata={"source": Path(path).name})


def read_contour(path: Path, input_format: str = "auto", closed: bool = True) -> Contour:
    """Read a contour, picking the format from the file suffix when ``input_format='auto'``."""
    path = Path(path)
    fmt = input_format
    if fmt == "auto":
        fmt = "csv" if path.suffix.lower() in (".csv", ".txt") else "json"
    if fmt == "csv":
        contour = read_contour_csv(path, closed=closed)
    elif fmt == "json":
        contour = read_contour_json(path)
    else:
        raise ValueError(f"Unsupported contour format: {input_format}")
    logger.info(f"Loaded {len(contour)}-point contour from {path.name}")
    return contour


# ── Writers ──────────────────────────────────────────────────────────

def write_contour_json(contour: Contour, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(contour_to_record(contour).model_dump(), f, indent=2)
    return path


def write_pieces_json(pieces: list[PieceRecord], path: Path, meta: StepMeta | None = None) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "meta": meta.model_dump() if meta is not None else None,
        "num_pieces": len(pieces),
        "pieces": [p.model_dump() for p in pieces],
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
    return path


def read_pieces_json(path: Path) -> list[PieceRecord]:
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    return [PieceRecord(**p) for p in raw.get("pieces", [])]
