"""I/O contracts for Step 02: COLMAP SfM."""

from pathlib import Path
from pydantic import BaseModel, Field

from splatpipe.steps.s01_workspace.contracts import Workspace


class ColmapInput(BaseModel):
    workspace: Workspace = Field(..., description="Prepared workspace")


class ColmapOutput(BaseModel):
    model_dir: Path = Field(..., description="COLMAP model directory (sparse/0)")
    num_models: int = Field(..., description="Number of models the mapper produced")
    num_cameras: int = Field(0, description="Number of cameras in the model")
    num_registered: int = Field(0, description="Number of successfully registered images")
    num_points3d: int = Field(0, description="Number of 3D points in sparse cloud")
