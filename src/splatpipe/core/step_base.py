"""Base class for all pipeline steps.

Every step declares typed Input, Output, Config via Pydantic models and
receives the command runner it may use, so steps can be exercised in
isolation with a fake runner instead of the real external tools.
"""

from __future__ import annotations

import time
import logging
from abc import ABC, abstractmethod
from typing import Generic, TypeVar, ClassVar

from pydantic import BaseModel

from splatpipe.utils.subprocess_utils import CommandRunner, run_command

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)
ConfigT = TypeVar("ConfigT", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseStep(ABC, Generic[InputT, OutputT, ConfigT]):
    """Abstract base for pipeline steps.

    Subclasses must:
    1. Define concrete Pydantic models for InputT, OutputT, ConfigT
    2. Set the class variable ``name`` used in log lines
    3. Implement run() and validate_inputs()

    validate_inputs() raises the step's PipelineError subclass when a
    precondition does not hold; run() raises it when the work itself fails.

    Example:
        class ColmapStep(BaseStep[ColmapInput, ColmapOutput, ColmapConfig]):
            name = "colmap"

            def run(self, inputs: ColmapInput) -> ColmapOutput: ...
            def validate_inputs(self, inputs: ColmapInput) -> None: ...
    """

    name: ClassVar[str] = ""

    def __init__(
        self,
        config: ConfigT,
        runner: CommandRunner | None = None,
        timeout: float | None = None,
    ):
        self.config = config
        self.runner = runner or run_command
        self.timeout = timeout

    @abstractmethod
    def run(self, inputs: InputT) -> OutputT:
        """Execute this pipeline step. Returns output model."""
        ...

    @abstractmethod
    def validate_inputs(self, inputs: InputT) -> None:
        """Check that all required input artifacts exist and are valid."""
        ...

    def execute(self, inputs: InputT) -> OutputT:
        """Run with logging, timing, and validation."""
        step_name = self.name or self.__class__.__name__
        logger.info(f"[{step_name}] Validating inputs...")
        self.validate_inputs(inputs)

        logger.info(f"[{step_name}] Starting...")
        t0 = time.time()
        result = self.run(inputs)
        elapsed = time.time() - t0
        logger.info(f"[{step_name}] Done in {elapsed:.1f}s")
        return result
