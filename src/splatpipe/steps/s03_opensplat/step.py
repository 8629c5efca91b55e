"""Step 03: 3D Gaussian Splatting training via the OpenSplat CLI."""

from __future__ import annotations

import logging
from typing import ClassVar

from splatpipe.core.errors import TrainingError
from splatpipe.core.step_base import BaseStep
from splatpipe.utils.io import read_ply_vertex_count
from .config import SplatConfig
from .contracts import SplatInput, SplatOutput

logger = logging.getLogger(__name__)

CPU_FLAG = "--cpu"


class TrainSplatStep(BaseStep[SplatInput, SplatOutput, SplatConfig]):
    name: ClassVar[str] = "opensplat"

    def validate_inputs(self, inputs: SplatInput) -> None:
        ws = inputs.workspace
        if not ws.images_dir.is_dir():
            raise TrainingError(f"Workspace images not found: {ws.images_dir}")
        if not (ws.sparse_dir / "0").is_dir():
            raise TrainingError(
                f"COLMAP model not found: {ws.sparse_dir / '0'}",
                hint="Run the COLMAP stage before training.",
            )

    def build_command(self, inputs: SplatInput) -> list[str]:
        """OpenSplat command line; user options come last, unmodified."""
        cmd = [self.config.binary, str(inputs.workspace.root)]
        if self.config.force_cpu and CPU_FLAG not in inputs.extra_args:
            cmd.append(CPU_FLAG)
        cmd += ["-o", str(inputs.output_path)]
        cmd += inputs.extra_args
        return cmd

    def run(self, inputs: SplatInput) -> SplatOutput:
        output_path = inputs.output_path
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise TrainingError(
                f"Cannot create output directory '{output_path.parent}': {exc}",
                hint="Choose a writable output path.",
            ) from exc

        logger.info("Training 3D Gaussians...")
        result = self.runner(self.build_command(inputs), timeout=self.timeout)
        if result.timed_out:
            raise TrainingError(
                f"OpenSplat timed out after {self.timeout}s.", result=result
            )
        if not result.ok:
            raise TrainingError(
                f"OpenSplat failed with exit code {result.returncode}.", result=result
            )

        if not output_path.is_file() or output_path.stat().st_size == 0:
            raise TrainingError(
                f"OpenSplat exited successfully but '{output_path}' is missing or empty.",
                result=result,
            )

        size_bytes = output_path.stat().st_size
        num_gaussians = read_ply_vertex_count(output_path)
        if num_gaussians is not None:
            logger.info(f"Trained {num_gaussians} gaussians")

        return SplatOutput(
            output_path=output_path,
            size_bytes=size_bytes,
            num_gaussians=num_gaussians,
        )
