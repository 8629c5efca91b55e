"""Error taxonomy for the splat pipeline.

Every failure is fatal to the run. Each error carries a short remedy hint
that the CLI prints under the message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from splatpipe.utils.subprocess_utils import CommandResult


class PipelineError(Exception):
    """Base class for all pipeline failures."""

    default_hint: str = ""

    def __init__(self, message: str, hint: str | None = None):
        super().__init__(message)
        self.message = message
        self.hint = self.default_hint if hint is None else hint


class UsageError(PipelineError):
    default_hint = "Run with --help for usage."


class MissingDependencyError(PipelineError):
    default_hint = "Install it before running this pipeline."

    def __init__(self, tool: str, hint: str | None = None):
        super().__init__(f"'{tool}' not found in PATH.", hint)
        self.tool = tool


class InvalidInputError(PipelineError):
    default_hint = "Need at least 3 overlapping images for reconstruction."


class WorkspaceError(PipelineError):
    default_hint = "Check that the temp directory is writable."


class StageError(PipelineError):
    """A pipeline stage failed, optionally because an external command did."""

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        result: CommandResult | None = None,
    ):
        super().__init__(message, hint)
        self.result = result

    @property
    def output_tail(self) -> str:
        if self.result is None:
            return ""
        return self.result.output_tail()


class ReconstructionError(StageError):
    default_hint = "Check that your images have sufficient overlap."


class TrainingError(StageError):
    default_hint = "Check the OpenSplat output above; try --downscale-factor or fewer --num-iters."
