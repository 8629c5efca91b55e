"""Configuration for Step 02: COLMAP SfM."""

from pydantic import BaseModel, Field


class ColmapConfig(BaseModel):
    binary: str = Field("colmap", description="COLMAP executable name or path")
    single_camera: bool = Field(True, description="Share intrinsics across all images")
