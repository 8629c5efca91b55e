"""CLI entry point for the splat pipeline.

Usage:
    splatpipe <image_dir> [output.ply] [opensplat_options...]

Examples:
    splatpipe ./my_photos
    splatpipe ./my_photos scene.ply --num-iters 10000
    splatpipe ./my_photos output.ply --downscale-factor 2
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from splatpipe.core.errors import PipelineError, StageError, UsageError
from splatpipe.core.logging import parse_log_level, setup_logging

USAGE = """\
Usage: splatpipe <image_dir> [output.ply] [opensplat_options...]

Arguments:
  image_dir           Directory containing input images (jpg/png/tif)
  output.ply          Output file path (default: splat.ply)

OpenSplat options (passed through):
  -n, --num-iters N         Training iterations (default: 30000)
  -d, --downscale-factor N  Downscale input images (default: 1)
  -s, --save-every N        Save checkpoint every N steps
      --cpu                 Force CPU execution
      --val                 Withhold one camera for validation

  Options are forwarded as written. A bare "--" is consumed by the
  argument parser and is not passed on to OpenSplat.

Pipeline options:
  --pipeline-config PATH    YAML pipeline configuration
  --log-level LEVEL         DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)
  --gpu                     Do not force --cpu on OpenSplat

Dependencies:
  - colmap    (https://colmap.github.io)
  - opensplat (https://github.com/pierotofy/OpenSplat)
"""

app = typer.Typer(name="splatpipe", help="Images to 3D Gaussian splat (.ply) via COLMAP + OpenSplat")
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger("splatpipe.cli")


def _print_error(exc: PipelineError) -> None:
    err_console.print(f"[red]ERROR:[/red] {escape(exc.message)}", highlight=False, soft_wrap=True)
    if exc.hint:
        err_console.print(f"       {exc.hint}", markup=False, highlight=False, soft_wrap=True)
    if isinstance(exc, StageError) and exc.output_tail:
        err_console.print(
            Panel(Text(exc.output_tail), title="Tool output (tail)", border_style="red")
        )


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def main(
    ctx: typer.Context,
    image_dir: Optional[Path] = typer.Argument(
        None, help="Directory containing input images", show_default=False
    ),
    pipeline_config: Optional[Path] = typer.Option(
        None, "--pipeline-config", help="Pipeline YAML config path"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)"
    ),
    gpu: bool = typer.Option(False, "--gpu", help="Do not force --cpu on OpenSplat"),
) -> None:
    """Turn a directory of photos into a Gaussian splat .ply."""
    from splatpipe.core.pipeline_runner import (
        load_pipeline_config,
        report,
        run_pipeline,
        split_output_argument,
        viewer_hints,
    )

    try:
        if image_dir is None:
            raise UsageError("Missing required argument: image_dir")

        cfg = load_pipeline_config(pipeline_config)
        try:
            level = parse_log_level(log_level or cfg.log_level)
        except ValueError as exc:
            raise UsageError(str(exc)) from exc
        setup_logging(level)
        if gpu:
            cfg.splat.force_cpu = False

        output_path, extra_args = split_output_argument(ctx.args, cfg.default_output)
        result = run_pipeline(
            image_dir=image_dir,
            output_path=output_path,
            extra_args=extra_args,
            config=cfg,
        )
    except UsageError as exc:
        err_console.print(USAGE, highlight=False, markup=False)
        _print_error(exc)
        raise typer.Exit(1)
    except PipelineError as exc:
        logger.error(exc.message)
        _print_error(exc)
        raise typer.Exit(1)

    recon = result.reconstruction
    stats = (
        f"Images: {result.images.image_count}  "
        f"Registered: {recon.num_registered}  "
        f"3D points: {recon.num_points3d}"
    )
    if result.splat.num_gaussians is not None:
        stats += f"  Gaussians: {result.splat.num_gaussians}"

    console.rule("[green]Done![/green]")
    console.print(report(result.splat.output_path), markup=False, highlight=False, soft_wrap=True)
    console.print(stats, markup=False, highlight=False)
    console.print(f"Workspace: {result.workspace.root}", markup=False, highlight=False, soft_wrap=True)
    console.print("View your splat at:")
    for url in viewer_hints():
        console.print(f"  - {url}", highlight=False)


if __name__ == "__main__":
    app()
