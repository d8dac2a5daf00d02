"""I/O contracts for Step 02: Split contour along a plane."""

from pathlib import Path

from pydantic import BaseModel, Field


class SplitPlaneInput(BaseModel):
    contour_file: Path = Field(..., description="Path to contour.json from s01")


class SplitPlaneOutput(BaseModel):
    pieces_file: Path = Field(..., description="Path to pieces.json with the split contours")
    num_pieces: int = Field(0)
    num_above: int = Field(0, description="Pieces lying on the side the normal points to")
    num_below: int = Field(0)
    total_area: float = Field(0.0, description="Sum of absolute piece areas")
