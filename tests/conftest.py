"""Shared pytest fixtures for splatpipe tests."""

from pathlib import Path

import pytest

from splatpipe.core.contracts import PipelineConfig
from tests.fakes import FakeRunner


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    """A directory of five fake photos plus files that must be ignored."""
    photos = tmp_path / "photos"
    photos.mkdir()
    for i, ext in enumerate(["jpg", "JPG", "jpeg", "png", "TIFF"]):
        (photos / f"img_{i:03d}.{ext}").write_bytes(b"\xff\xd8fake")
    (photos / "notes.txt").write_text("not an image")
    nested = photos / "nested.jpg"
    nested.mkdir()
    (nested / "deep.jpg").write_bytes(b"fake")
    return photos


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def tools_on_path(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Pretend colmap and opensplat are installed."""
    found = {"colmap": "/usr/bin/colmap", "opensplat": "/usr/local/bin/opensplat"}
    monkeypatch.setattr(
        "splatpipe.core.dependencies.shutil.which", lambda name: found.get(name)
    )
    return found


@pytest.fixture
def pipeline_config(tmp_path: Path) -> PipelineConfig:
    """Defaults, with workspaces created under the test's tmp dir."""
    root = tmp_path / "workspaces"
    root.mkdir()
    return PipelineConfig(workspace_root=root)
