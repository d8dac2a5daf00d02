"""Common Pydantic models shared across pipeline steps."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class StepMeta(BaseModel):
    """Metadata attached to every step output for reproducibility."""

    step_name: str
    elapsed_seconds: float = 0.0
    params: dict[str, Any] = Field(default_factory=dict)


class ContourRecord(BaseModel):
    """Serialized form of a contour: ordered (x, y, z) points plus closure flag."""

    points: list[list[float]] = Field(default_factory=list)
    closed: bool = True
    metadata: dict[str, str] = Field(default_factory=dict)


class PlaneSpec(BaseModel):
    """A cutting plane given by a normal and any point on the plane."""

    normal: list[float] = Field(..., min_length=3, max_length=3)
    point: list[float] = Field(..., min_length=3, max_length=3)


class PieceRecord(BaseModel):
    """One split piece with derived quantities for reporting."""

    index: int
    side: str = Field(..., description="'above' or 'below' the cutting plane")
    signed_area: float
    centroid: list[float] = Field(..., min_length=3, max_length=3)
    contour: ContourRecord


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration loaded from pipeline.yaml."""

    project_name: str = "planecut_project"
    data_root: Path = Path("./data")
    steps: list[StepEntry] = Field(default_factory=list)


class StepEntry(BaseModel):
    """One entry in the pipeline step list."""

    name: str
    module: str
    config_file: str
    depends_on: list[str] = Field(default_factory=list)
    inputs: dict[str, Any] = Field(default_factory=dict, description="Literal input fields, e.g. a source file")
    enabled: bool = True


# Fix forward reference
PipelineConfig.model_rebuild()
