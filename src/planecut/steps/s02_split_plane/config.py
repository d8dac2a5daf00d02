"""Configuration for Step 02: Split contour along a plane."""

from pydantic import BaseModel, Field

from planecut.core.contracts import PlaneSpec


class SplitPlaneConfig(BaseModel):
    # Cutting plane; the normal need not be unit length but must be non-zero
    plane: PlaneSpec = Field(
        default_factory=lambda: PlaneSpec(normal=[1.0, 0.0, 0.0], point=[0.0, 0.0, 0.0]),
        description="Cutting plane as a normal and any point on it",
    )

    # Planarity
    height_tolerance_percent: float = Field(
        0.1, gt=0, description="Max relative height spread (percent) for a contour to count as planar"
    )

    # Verification
    verify_pieces: bool = Field(True, description="Check pieces are valid polygons and conserve area")
    area_rtol: float = Field(1e-9, gt=0, description="Relative tolerance for the area conservation check")
