"""Step 01: Import a contour file into the pipeline as normalized contour.json."""

from __future__ import annotations

import logging
from typing import ClassVar

from planecut.core.step_base import BaseStep
from planecut.utils.io import read_contour, write_contour_json
from .config import ImportContourConfig
from .contracts import ImportContourInput, ImportContourOutput

logger = logging.getLogger(__name__)

_SUPPORTED_SUFFIXES = {".json", ".csv", ".txt"}


class ImportContourStep(BaseStep[ImportContourInput, ImportContourOutput, ImportContourConfig]):
    """Read a contour from JSON or CSV, optionally reorient it, and store it as JSON."""

    name: ClassVar[str] = "import_contour"
    input_type: ClassVar = ImportContourInput
    output_type: ClassVar = ImportContourOutput
    config_type: ClassVar = ImportContourConfig

    def validate_inputs(self, inputs: ImportContourInput) -> bool:
        if not inputs.source_file.exists():
            logger.error(f"Contour file not found: {inputs.source_file}")
            return False
        if self.config.input_format == "auto" and inputs.source_file.suffix.lower() not in _SUPPORTED_SUFFIXES:
            logger.error(f"Cannot infer contour format from suffix: {inputs.source_file.suffix}")
            return False
        return True

    def run(self, inputs: ImportContourInput) -> ImportContourOutput:
        output_dir = self.data_root / "interim" / "s01_import_contour"
        output_dir.mkdir(parents=True, exist_ok=True)

        contour = read_contour(
            inputs.source_file,
            input_format=self.config.input_format,
            closed=self.config.assume_closed,
        )
        if len(contour) == 0:
            raise RuntimeError(f"Contour file has no points: {inputs.source_file}")

        contour.metadata.setdefault("source", inputs.source_file.name)

        signed_area = 0.0
        if contour.closed:
            signed_area = contour.signed_area()
            if self.config.reorient_counter_clockwise and signed_area < 0.0:
                contour.reorient_counter_clockwise()
                signed_area = -signed_area
                logger.info("Reoriented contour to counter-clockwise winding")

        perimeter = contour.perimeter()
        contour_path = write_contour_json(contour, output_dir / "contour.json")
        logger.info(
            f"Saved {len(contour)}-point contour (area={signed_area:.6g}, "
            f"perimeter={perimeter:.6g}) -> {contour_path}"
        )

        return ImportContourOutput(
            contour_file=contour_path,
            num_points=len(contour),
            closed=contour.closed,
            signed_area=signed_area,
            perimeter=perimeter,
        )
