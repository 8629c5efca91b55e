"""Pipeline orchestrator: validate, check tools, build workspace, run COLMAP then OpenSplat.

The order is fixed and there are no retries; the first PipelineError ends the
run. The workspace is kept on every exit path for inspection.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from pathlib import Path

import yaml
from pydantic import ValidationError

from splatpipe.steps.s00_validate_images.config import ValidateImagesConfig
from splatpipe.steps.s00_validate_images.contracts import ValidateImagesInput
from splatpipe.steps.s00_validate_images.step import ValidateImagesStep
from splatpipe.steps.s01_workspace.config import WorkspaceConfig
from splatpipe.steps.s01_workspace.contracts import Workspace, WorkspaceInput
from splatpipe.steps.s01_workspace.step import PrepareWorkspaceStep
from splatpipe.steps.s02_colmap.contracts import ColmapInput
from splatpipe.steps.s02_colmap.step import ColmapStep
from splatpipe.steps.s03_opensplat.contracts import SplatInput
from splatpipe.steps.s03_opensplat.step import TrainSplatStep
from splatpipe.utils.io import human_size
from splatpipe.utils.subprocess_utils import CommandRunner
from .contracts import PipelineConfig, PipelineResult
from .dependencies import check_dependencies
from .errors import UsageError

logger = logging.getLogger(__name__)

VIEWER_URLS = (
    "https://playcanvas.com/supersplat/editor",
    "https://antimatter15.com/splat/",
)


def load_pipeline_config(config_path: Path | None = None) -> PipelineConfig:
    """Load and validate pipeline.yaml; defaults when no path is given."""
    if config_path is None:
        return PipelineConfig()
    if not config_path.is_file():
        raise UsageError(f"Pipeline config not found: '{config_path}'")
    try:
        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        return PipelineConfig(**raw)
    except (yaml.YAMLError, ValidationError, TypeError) as exc:
        raise UsageError(
            f"Invalid pipeline config '{config_path}': {exc}",
            hint="See configs/pipeline.yaml for the expected layout.",
        ) from exc


def split_output_argument(
    args: Sequence[str], default_output: Path
) -> tuple[Path, list[str]]:
    """Separate the optional output path from the pass-through options.

    The first argument is the output path only if it does not start with
    ``-``; everything after it is returned unchanged and in order.
    """
    rest = list(args)
    if rest and not rest[0].startswith("-"):
        return Path(rest[0]), rest[1:]
    return default_output, rest


def _banner(title: str) -> None:
    logger.info("=" * 42)
    logger.info(f" {title}")
    logger.info("=" * 42)


def run_pipeline(
    image_dir: Path,
    output_path: Path | None = None,
    extra_args: Sequence[str] = (),
    config: PipelineConfig | None = None,
    runner: CommandRunner | None = None,
) -> PipelineResult:
    """Turn a directory of photos into a Gaussian splat .ply.

    Validate -> CheckDeps -> PrepareWorkspace -> Extract -> Match -> Map
    -> VerifyReconstruction -> Train.
    """
    cfg = config or PipelineConfig()
    output_path = output_path if output_path is not None else cfg.default_output
    timeout = cfg.command_timeout
    t0 = time.time()

    logger.info(f"Pipeline '{cfg.project_name}': {image_dir} -> {output_path}")

    images = ValidateImagesStep(
        config=ValidateImagesConfig(
            min_images=cfg.min_images, image_extensions=cfg.image_extensions
        ),
    ).execute(ValidateImagesInput(image_dir=image_dir))

    logger.info("Checking dependencies...")
    check_dependencies(cfg.required_tools)

    workspace: Workspace = PrepareWorkspaceStep(
        config=WorkspaceConfig(root=cfg.workspace_root, prefix=cfg.workspace_prefix),
    ).execute(WorkspaceInput(image_dir=images.image_dir, output_path=output_path))

    try:
        _banner("Stage 1: COLMAP Structure-from-Motion")
        reconstruction = ColmapStep(
            config=cfg.colmap, runner=runner, timeout=timeout
        ).execute(ColmapInput(workspace=workspace))

        _banner("Stage 2: OpenSplat Gaussian Splatting")
        splat = TrainSplatStep(
            config=cfg.splat, runner=runner, timeout=timeout
        ).execute(
            SplatInput(
                workspace=workspace,
                output_path=output_path,
                extra_args=list(extra_args),
            )
        )
    finally:
        logger.info(f"Workspace preserved at: {workspace.root}")

    elapsed = time.time() - t0
    logger.info(f"Pipeline complete in {elapsed:.1f}s.")
    return PipelineResult(
        images=images,
        workspace=workspace,
        reconstruction=reconstruction,
        splat=splat,
        elapsed_seconds=elapsed,
    )


def report(output_path: Path) -> str:
    """Human-readable summary line: artifact path and size."""
    size = human_size(output_path.stat().st_size)
    return f"Output: {output_path} ({size})"


def viewer_hints() -> list[str]:
    return list(VIEWER_URLS)
