"""Configuration for Step 00: input image validation."""

from pydantic import BaseModel, Field

DEFAULT_IMAGE_EXTENSIONS = ["jpg", "jpeg", "png", "tif", "tiff"]


class ValidateImagesConfig(BaseModel):
    min_images: int = Field(3, ge=1, description="Minimum number of recognized images")
    image_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IMAGE_EXTENSIONS),
        description="Recognized image extensions (case-insensitive, without dot)",
    )
