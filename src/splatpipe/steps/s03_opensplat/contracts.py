"""I/O contracts for Step 03: OpenSplat Gaussian splat training."""

from pathlib import Path
from pydantic import BaseModel, Field

from splatpipe.steps.s01_workspace.contracts import Workspace


class SplatInput(BaseModel):
    workspace: Workspace = Field(..., description="Workspace holding images and sparse/0")
    output_path: Path = Field(..., description="Where OpenSplat writes the .ply")
    extra_args: list[str] = Field(default_factory=list, description="Forwarded verbatim to OpenSplat")


class SplatOutput(BaseModel):
    output_path: Path = Field(..., description="Trained Gaussian splat (.ply)")
    size_bytes: int = Field(..., description="Size of the output file")
    num_gaussians: int | None = Field(None, description="Vertex count from the PLY header")
