"""Step 01: Create the scratch workspace the external tools share.

Layout expected by COLMAP and OpenSplat::

    <workspace>/
      images       -> symlink to the input directory
      database.db  written by COLMAP
      sparse/0/    written by the COLMAP mapper, read by OpenSplat

The workspace is kept after the run. Only a half-built workspace is removed.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import ClassVar

from splatpipe.core.errors import WorkspaceError
from splatpipe.core.step_base import BaseStep
from .config import WorkspaceConfig
from .contracts import Workspace, WorkspaceInput

logger = logging.getLogger(__name__)


def _is_within(path: Path, parent: Path) -> bool:
    try:
        path.resolve().relative_to(parent.resolve())
    except ValueError:
        return False
    return True


class PrepareWorkspaceStep(BaseStep[WorkspaceInput, Workspace, WorkspaceConfig]):
    name: ClassVar[str] = "workspace"

    def validate_inputs(self, inputs: WorkspaceInput) -> None:
        if not inputs.image_dir.is_dir():
            raise WorkspaceError(
                f"Image directory not found: '{inputs.image_dir}'",
                hint="Validate the input directory before preparing a workspace.",
            )
        root = self.config.root
        if root is not None and not root.is_dir():
            raise WorkspaceError(f"Workspace root does not exist: '{root}'")

    def run(self, inputs: WorkspaceInput) -> Workspace:
        root_dir = str(self.config.root) if self.config.root is not None else None
        try:
            root = Path(tempfile.mkdtemp(prefix=self.config.prefix, dir=root_dir))
        except OSError as exc:
            raise WorkspaceError(f"Could not create workspace: {exc}") from exc

        try:
            workspace = self._populate(root, inputs)
        except BaseException:
            shutil.rmtree(root, ignore_errors=True)
            raise

        logger.info(f"Workspace: {workspace.root}")
        return workspace

    def _populate(self, root: Path, inputs: WorkspaceInput) -> Workspace:
        workspace = Workspace.at(root)

        if _is_within(inputs.output_path, workspace.root):
            raise WorkspaceError(
                f"Output path '{inputs.output_path}' is inside the workspace",
                hint="Choose an output path outside the workspace directory.",
            )

        try:
            workspace.images_dir.symlink_to(inputs.image_dir.resolve(), target_is_directory=True)
            workspace.sparse_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WorkspaceError(f"Could not populate workspace '{root}': {exc}") from exc

        return workspace
