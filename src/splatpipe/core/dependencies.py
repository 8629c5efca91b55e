"""Presence checks for the external tools the pipeline shells out to."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from .errors import MissingDependencyError

logger = logging.getLogger(__name__)

INSTALL_HINTS = {
    "colmap": "Install COLMAP: https://colmap.github.io/",
    "opensplat": "Install OpenSplat: https://github.com/pierotofy/OpenSplat",
}


def check_dependency(tool: str) -> Path:
    """Resolve tool on PATH or raise MissingDependencyError."""
    resolved = shutil.which(tool)
    if resolved is None:
        hint = INSTALL_HINTS.get(Path(tool).name, MissingDependencyError.default_hint)
        raise MissingDependencyError(tool, hint=hint)
    logger.debug(f"{tool} -> {resolved}")
    return Path(resolved)


def check_dependencies(tools: Iterable[str]) -> dict[str, Path]:
    """Check each tool in order; the first missing one raises."""
    return {tool: check_dependency(tool) for tool in tools}
