"""Fixtures for step tests that need a prepared workspace."""

from pathlib import Path

import pytest

from splatpipe.steps.s01_workspace.config import WorkspaceConfig
from splatpipe.steps.s01_workspace.contracts import Workspace, WorkspaceInput
from splatpipe.steps.s01_workspace.step import PrepareWorkspaceStep


@pytest.fixture
def workspace(image_dir: Path, tmp_path: Path) -> Workspace:
    root = tmp_path / "ws"
    root.mkdir()
    step = PrepareWorkspaceStep(config=WorkspaceConfig(root=root))
    return step.execute(WorkspaceInput(image_dir=image_dir, output_path=tmp_path / "splat.ply"))
