"""Configuration for Step 01: Import contour."""

from typing import Literal

from pydantic import BaseModel, Field


class ImportContourConfig(BaseModel):
    input_format: Literal["auto", "json", "csv"] = Field(
        "auto", description="Contour file format; 'auto' picks csv for .csv/.txt and json otherwise"
    )
    assume_closed: bool = Field(True, description="Mark CSV contours as closed (JSON carries its own flag)")
    reorient_counter_clockwise: bool = Field(
        False, description="Reverse the point order if the contour winds clockwise"
    )
