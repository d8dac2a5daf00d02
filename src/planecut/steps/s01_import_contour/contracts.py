"""I/O contracts for Step 01: Import contour."""

from pathlib import Path

from pydantic import BaseModel, Field


class ImportContourInput(BaseModel):
    source_file: Path = Field(..., description="Path to a contour JSON or x,y,z CSV file")


class ImportContourOutput(BaseModel):
    contour_file: Path = Field(..., description="Path to normalized contour.json")
    num_points: int = Field(..., description="Number of points in the contour")
    closed: bool = Field(True)
    signed_area: float = Field(0.0, description="Signed XY area (0 for open contours)")
    perimeter: float = Field(0.0)
