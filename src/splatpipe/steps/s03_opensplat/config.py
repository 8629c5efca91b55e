"""Configuration for Step 03: OpenSplat Gaussian splat training."""

from pydantic import BaseModel, Field


class SplatConfig(BaseModel):
    binary: str = Field("opensplat", description="OpenSplat executable name or path")
    force_cpu: bool = Field(True, description="Pass --cpu to OpenSplat")
