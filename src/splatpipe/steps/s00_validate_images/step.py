"""Step 00: Validate the input image directory before any tool runs."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import ClassVar

from splatpipe.core.errors import InvalidInputError
from splatpipe.core.step_base import BaseStep
from .config import ValidateImagesConfig
from .contracts import ValidateImagesInput, ValidateImagesOutput

logger = logging.getLogger(__name__)


def list_images(image_dir: Path, extensions: Iterable[str]) -> list[str]:
    """Sorted names of regular files in image_dir with a recognized extension.

    Non-recursive; extension matching ignores case.
    """
    suffixes = {"." + ext.lower().lstrip(".") for ext in extensions}
    return sorted(
        p.name
        for p in image_dir.iterdir()
        if p.is_file() and p.suffix.lower() in suffixes
    )


class ValidateImagesStep(
    BaseStep[ValidateImagesInput, ValidateImagesOutput, ValidateImagesConfig]
):
    name: ClassVar[str] = "validate_images"

    def validate_inputs(self, inputs: ValidateImagesInput) -> None:
        image_dir = inputs.image_dir
        if not image_dir.exists():
            raise InvalidInputError(
                f"Image directory not found: '{image_dir}'",
                hint="Pass a directory containing jpg/png/tif images.",
            )
        if not image_dir.is_dir():
            raise InvalidInputError(
                f"Not a directory: '{image_dir}'",
                hint="Pass a directory containing jpg/png/tif images.",
            )
        if not os.access(image_dir, os.R_OK | os.X_OK):
            raise InvalidInputError(
                f"Image directory is not readable: '{image_dir}'",
                hint="Check the directory permissions.",
            )

    def run(self, inputs: ValidateImagesInput) -> ValidateImagesOutput:
        image_dir = inputs.image_dir.resolve()
        try:
            images = list_images(image_dir, self.config.image_extensions)
        except OSError as exc:
            raise InvalidInputError(
                f"Cannot list '{image_dir}': {exc}",
                hint="Check the directory permissions.",
            ) from exc

        if len(images) < self.config.min_images:
            raise InvalidInputError(
                f"Found only {len(images)} images in '{image_dir}'.",
                hint=(
                    f"Need at least {self.config.min_images} overlapping images "
                    "for reconstruction."
                ),
            )

        logger.info(f"Found {len(images)} images in '{image_dir}'")
        return ValidateImagesOutput(
            image_dir=image_dir,
            image_count=len(images),
            image_list=images,
        )
