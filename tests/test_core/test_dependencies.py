"""Tests for external tool presence checks."""

import os
from pathlib import Path

import pytest

from splatpipe.core.dependencies import check_dependencies, check_dependency
from splatpipe.core.errors import MissingDependencyError


def test_found(tools_on_path):
    assert check_dependency("colmap") == Path("/usr/bin/colmap")


def test_missing_has_install_hint(tools_on_path):
    with pytest.raises(MissingDependencyError) as excinfo:
        check_dependency("glomap")
    assert excinfo.value.message == "'glomap' not found in PATH."
    assert excinfo.value.hint == "Install it before running this pipeline."


def test_known_tool_hint(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr("splatpipe.core.dependencies.shutil.which", lambda name: None)
    with pytest.raises(MissingDependencyError) as excinfo:
        check_dependency("opensplat")
    assert "github.com/pierotofy/OpenSplat" in excinfo.value.hint


def test_check_all_in_order(monkeypatch: pytest.MonkeyPatch):
    seen = []

    def which(name):
        seen.append(name)
        return None

    monkeypatch.setattr("splatpipe.core.dependencies.shutil.which", which)
    with pytest.raises(MissingDependencyError) as excinfo:
        check_dependencies(["colmap", "opensplat"])
    assert excinfo.value.tool == "colmap"
    assert seen == ["colmap"]


def test_check_all_found(tools_on_path):
    resolved = check_dependencies(["colmap", "opensplat"])
    assert list(resolved) == ["colmap", "opensplat"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX executable bit")
def test_real_path_lookup(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    tool = tmp_path / "colmap"
    tool.write_text("#!/bin/sh\nexit 0\n")
    tool.chmod(0o755)
    monkeypatch.setenv("PATH", str(tmp_path))
    assert check_dependency("colmap") == tool
