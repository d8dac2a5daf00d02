"""Step 02: Split the imported contour along a cutting plane."""

from __future__ import annotations

import logging
import time
from typing import ClassVar

from planecut.contour.split import piece_side, split_along_plane
from planecut.core.contracts import PieceRecord, StepMeta
from planecut.core.step_base import BaseStep
from planecut.utils.geometry import Plane, Vec3
from planecut.utils.io import contour_to_record, read_contour_json, write_pieces_json
from ._verification import verify_pieces
from .config import SplitPlaneConfig
from .contracts import SplitPlaneInput, SplitPlaneOutput

logger = logging.getLogger(__name__)


class SplitPlaneStep(BaseStep[SplitPlaneInput, SplitPlaneOutput, SplitPlaneConfig]):
    """Split a contour with the configured plane and store the pieces.

    Each piece is tagged with the side of the plane it lies on.
    """

    name: ClassVar[str] = "split_plane"
    input_type: ClassVar = SplitPlaneInput
    output_type: ClassVar = SplitPlaneOutput
    config_type: ClassVar = SplitPlaneConfig

    def _plane(self) -> Plane:
        return Plane(
            normal=Vec3.from_iterable(self.config.plane.normal),
            point=Vec3.from_iterable(self.config.plane.point),
        )

    def validate_inputs(self, inputs: SplitPlaneInput) -> bool:
        if not inputs.contour_file.exists():
            logger.error(f"Contour file not found: {inputs.contour_file}")
            return False
        if self._plane().is_degenerate():
            logger.error(f"Plane normal has zero length: {self.config.plane.normal}")
            return False
        return True

    def run(self, inputs: SplitPlaneInput) -> SplitPlaneOutput:
        output_dir = self.data_root / "processed" / "s02_split_plane"
        output_dir.mkdir(parents=True, exist_ok=True)

        t0 = time.time()
        contour = read_contour_json(inputs.contour_file)
        plane = self._plane()
        tol = self.config.height_tolerance_percent

        pieces = split_along_plane(contour, plane, height_tolerance_percent=tol)
        logger.info(f"Split {len(contour)}-point contour into {len(pieces)} piece(s)")

        if self.config.verify_pieces:
            for issue in verify_pieces(contour, pieces, self.config.area_rtol, tol):
                logger.warning(f"Verification: {issue}")

        records: list[PieceRecord] = []
        for i, piece in enumerate(pieces):
            centroid = piece.centroid(tol)
            records.append(PieceRecord(
                index=i,
                side=piece_side(piece, plane, tol),
                signed_area=piece.signed_area(tol),
                centroid=centroid.to_list(),
                contour=contour_to_record(piece),
            ))

        meta = StepMeta(
            step_name=self.name,
            elapsed_seconds=time.time() - t0,
            params=self.config.model_dump(),
        )
        pieces_path = write_pieces_json(records, output_dir / "pieces.json", meta=meta)
        logger.info(f"Saved {len(records)} pieces -> {pieces_path}")

        num_above = sum(1 for r in records if r.side == "above")
        return SplitPlaneOutput(
            pieces_file=pieces_path,
            num_pieces=len(records),
            num_above=num_above,
            num_below=len(records) - num_above,
            total_area=sum(abs(r.signed_area) for r in records),
        )
