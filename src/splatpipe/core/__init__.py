"""splatpipe core: base step, shared contracts, errors, logging."""

from .step_base import BaseStep
from .contracts import PipelineConfig, PipelineResult
from .errors import (
    PipelineError,
    UsageError,
    MissingDependencyError,
    InvalidInputError,
    WorkspaceError,
    ReconstructionError,
    TrainingError,
)
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "PipelineConfig",
    "PipelineResult",
    "PipelineError",
    "UsageError",
    "MissingDependencyError",
    "InvalidInputError",
    "WorkspaceError",
    "ReconstructionError",
    "TrainingError",
    "setup_logging",
]
