"""Base class for planecut pipeline steps.

A step is a typed transform: Pydantic models describe its input, output and
config, so the runner can feed one step's output fields into the next step and
the CLI can tell the user which input fields a step needs.
"""

from __future__ import annotations

import time
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar, ClassVar

from pydantic import BaseModel

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)
ConfigT = TypeVar("ConfigT", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseStep(ABC, Generic[InputT, OutputT, ConfigT]):
    """Typed pipeline step writing its artifacts under ``data_root``.

    Subclasses set ``name``, ``input_type``, ``output_type`` and
    ``config_type``, and implement ``validate_inputs`` and ``run``.
    """

    name: ClassVar[str] = ""
    input_type: ClassVar[type[BaseModel]]
    output_type: ClassVar[type[BaseModel]]
    config_type: ClassVar[type[BaseModel]]

    def __init__(self, config: ConfigT, data_root: Path):
        self.config = config
        self.data_root = Path(data_root)

    @abstractmethod
    def run(self, inputs: InputT) -> OutputT:
        ...

    @abstractmethod
    def validate_inputs(self, inputs: InputT) -> bool:
        """Return False (after logging why) when input files are missing or unusable."""
        ...

    def execute(self, inputs: InputT) -> OutputT:
        """Validate, run and time the step.

        Raises ValueError when ``validate_inputs`` rejects the inputs; errors
        raised by ``run`` propagate unchanged.
        """
        step_name = self.name or self.__class__.__name__
        if not self.validate_inputs(inputs):
            raise ValueError(f"[{step_name}] Input validation failed")

        logger.info(f"[{step_name}] Starting...")
        t0 = time.time()
        result = self.run(inputs)
        logger.info(f"[{step_name}] Done in {time.time() - t0:.3f}s")
        return result

    @classmethod
    def required_input_fields(cls) -> list[str]:
        """Input fields without defaults, read from the input model's JSON schema."""
        return list(cls.input_type.model_json_schema().get("required", []))
