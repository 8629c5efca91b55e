"""Pipeline-level Pydantic models: configuration and run result."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from splatpipe.steps.s00_validate_images.config import DEFAULT_IMAGE_EXTENSIONS
from splatpipe.steps.s00_validate_images.contracts import ValidateImagesOutput
from splatpipe.steps.s01_workspace.contracts import Workspace
from splatpipe.steps.s02_colmap.config import ColmapConfig
from splatpipe.steps.s02_colmap.contracts import ColmapOutput
from splatpipe.steps.s03_opensplat.config import SplatConfig
from splatpipe.steps.s03_opensplat.contracts import SplatOutput
from .logging import parse_log_level


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration loaded from pipeline.yaml."""

    project_name: str = "splatpipe"
    min_images: int = Field(3, ge=1)
    image_extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_IMAGE_EXTENSIONS))
    default_output: Path = Path("splat.ply")
    workspace_root: Path | None = None
    workspace_prefix: str = "splatpipe_"
    command_timeout: float | None = Field(None, gt=0, description="Seconds per external command")
    log_level: str = "INFO"
    colmap: ColmapConfig = Field(default_factory=ColmapConfig)
    splat: SplatConfig = Field(default_factory=SplatConfig)

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        return parse_log_level(value)

    @property
    def required_tools(self) -> list[str]:
        return [self.colmap.binary, self.splat.binary]


class PipelineResult(BaseModel):
    """Everything a finished run produced."""

    images: ValidateImagesOutput
    workspace: Workspace
    reconstruction: ColmapOutput
    splat: SplatOutput
    elapsed_seconds: float = 0.0
