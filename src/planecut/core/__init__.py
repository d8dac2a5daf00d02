"""planecut core: pipeline runner, base step, shared contracts, errors."""

from .step_base import BaseStep
from .contracts import PipelineConfig, StepEntry, StepMeta, ContourRecord, PlaneSpec, PieceRecord
from .errors import SplitError, ContourInputError, SplitInvariantError
from .pipeline_runner import run_pipeline, load_pipeline_config
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "PipelineConfig",
    "StepEntry",
    "StepMeta",
    "ContourRecord",
    "PlaneSpec",
    "PieceRecord",
    "SplitError",
    "ContourInputError",
    "SplitInvariantError",
    "run_pipeline",
    "load_pipeline_config",
    "setup_logging",
]
