"""I/O contracts for Step 00: input image validation."""

from pathlib import Path
from pydantic import BaseModel, Field


class ValidateImagesInput(BaseModel):
    image_dir: Path = Field(..., description="Directory of input photographs")


class ValidateImagesOutput(BaseModel):
    image_dir: Path = Field(..., description="Resolved absolute image directory")
    image_count: int = Field(..., description="Number of recognized images")
    image_list: list[str] = Field(default_factory=list, description="Recognized image filenames")
