"""Step 02: COLMAP Structure-from-Motion via the COLMAP CLI.

Runs feature extraction, exhaustive matching and incremental mapping in
order against one workspace. The first failing sub-step aborts the run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from splatpipe.core.errors import ReconstructionError
from splatpipe.core.step_base import BaseStep
from splatpipe.steps.s01_workspace.contracts import Workspace
from splatpipe.utils.io import read_colmap_model_counts
from .config import ColmapConfig
from .contracts import ColmapInput, ColmapOutput

logger = logging.getLogger(__name__)

MODEL_INDEX = "0"


def verify_reconstruction(workspace: Workspace) -> Path:
    """Return the mapper's model 0 directory, or raise if it is missing."""
    model_dir = workspace.sparse_dir / MODEL_INDEX
    if not model_dir.is_dir():
        raise ReconstructionError(
            "COLMAP mapper failed to produce a reconstruction.",
            hint="Check that your images have sufficient overlap.",
        )
    return model_dir


class ColmapStep(BaseStep[ColmapInput, ColmapOutput, ColmapConfig]):
    name: ClassVar[str] = "colmap"

    def validate_inputs(self, inputs: ColmapInput) -> None:
        ws = inputs.workspace
        if not ws.images_dir.is_dir():
            raise ReconstructionError(
                f"Workspace images not found: {ws.images_dir}",
                hint="Prepare the workspace before running COLMAP.",
            )
        if not ws.sparse_dir.is_dir():
            raise ReconstructionError(
                f"Workspace sparse directory not found: {ws.sparse_dir}",
                hint="Prepare the workspace before running COLMAP.",
            )

    def run(self, inputs: ColmapInput) -> ColmapOutput:
        ws = inputs.workspace
        self.run_reconstruction(ws)
        return self.summarize(ws)

    def run_reconstruction(self, ws: Workspace) -> None:
        """Feature extraction, exhaustive matching, incremental mapping."""
        colmap = self.config.binary

        logger.info("[1/3] Extracting features...")
        self._run_stage("feature extraction", [
            colmap, "feature_extractor",
            "--database_path", str(ws.database_path),
            "--image_path", str(ws.images_dir),
            *(["--ImageReader.single_camera", "1"] if self.config.single_camera else []),
        ])

        logger.info("[2/3] Matching features (exhaustive)...")
        self._run_stage("feature matching", [
            colmap, "exhaustive_matcher",
            "--database_path", str(ws.database_path),
        ])

        logger.info("[3/3] Running sparse reconstruction...")
        self._run_stage("sparse reconstruction", [
            colmap, "mapper",
            "--database_path", str(ws.database_path),
            "--image_path", str(ws.images_dir),
            "--output_path", str(ws.sparse_dir),
        ])

    def summarize(self, ws: Workspace) -> ColmapOutput:
        model_dir = verify_reconstruction(ws)

        num_models = sum(1 for p in ws.sparse_dir.iterdir() if p.is_dir())
        if num_models > 1:
            logger.warning(
                f"COLMAP produced {num_models} disconnected models; using model {MODEL_INDEX}"
            )

        num_cameras, num_registered, num_points3d = read_colmap_model_counts(model_dir)
        logger.info("COLMAP reconstruction complete.")
        logger.info(
            f"Reconstruction: {num_registered} images, {num_points3d} 3D points, "
            f"{num_cameras} camera(s)"
        )

        return ColmapOutput(
            model_dir=model_dir,
            num_models=num_models,
            num_cameras=num_cameras,
            num_registered=num_registered,
            num_points3d=num_points3d,
        )

    def _run_stage(self, stage: str, cmd: list[str]) -> None:
        result = self.runner(cmd, timeout=self.timeout)
        if result.ok:
            return
        if result.timed_out:
            message = f"COLMAP {stage} timed out after {self.timeout}s."
        else:
            message = f"COLMAP {stage} failed with exit code {result.returncode}."
        raise ReconstructionError(message, result=result)
