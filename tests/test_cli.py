"""Tests for the splatpipe command line."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from splatpipe.cli import app
from tests.fakes import FakeRunner

runner = CliRunner()


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, tools_on_path) -> FakeRunner:
    """Run the CLI from tmp_path with fake tools and temp workspaces."""
    fake = FakeRunner()
    monkeypatch.setattr("splatpipe.core.step_base.run_command", fake)
    monkeypatch.setattr("splatpipe.cli.setup_logging", lambda level="INFO": None)
    ws_root = tmp_path / "workspaces"
    ws_root.mkdir()
    monkeypatch.setattr("tempfile.tempdir", str(ws_root))
    monkeypatch.chdir(tmp_path)
    return fake


def test_no_arguments_prints_usage():
    result = runner.invoke(app, [])
    assert result.exit_code == 1
    assert "Usage: splatpipe <image_dir>" in result.output
    assert "Missing required argument" in result.output


def test_default_output(cli_env: FakeRunner, image_dir: Path, tmp_path: Path):
    result = runner.invoke(app, [str(image_dir)])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "splat.ply").is_file()
    assert "Output: splat.ply (" in result.output
    assert "supersplat" in result.output
    assert cli_env.calls[-1] == [
        "opensplat", cli_env.calls[-1][1], "--cpu", "-o", "splat.ply",
    ]


def test_output_and_passthrough(cli_env: FakeRunner, image_dir: Path, tmp_path: Path):
    result = runner.invoke(
        app, [str(image_dir), "scene.ply", "--num-iters", "10000", "-d", "2", "--val"]
    )
    assert result.exit_code == 0, result.output
    assert (tmp_path / "scene.ply").is_file()
    splat_cmd = cli_env.calls[-1]
    assert splat_cmd[splat_cmd.index("-o") + 1] == "scene.ply"
    assert splat_cmd[-5:] == ["--num-iters", "10000", "-d", "2", "--val"]


def test_dash_argument_keeps_default_output(cli_env: FakeRunner, image_dir: Path, tmp_path: Path):
    result = runner.invoke(app, [str(image_dir), "-n", "500"])
    assert result.exit_code == 0, result.output
    splat_cmd = cli_env.calls[-1]
    assert splat_cmd[splat_cmd.index("-o") + 1] == "splat.ply"
    assert splat_cmd[-2:] == ["-n", "500"]


def test_gpu_flag(cli_env: FakeRunner, image_dir: Path):
    result = runner.invoke(app, [str(image_dir), "--gpu"])
    assert result.exit_code == 0, result.output
    assert "--cpu" not in cli_env.calls[-1]


def test_too_few_images(cli_env: FakeRunner, tmp_path: Path):
    photos = tmp_path / "few"
    photos.mkdir()
    (photos / "only.jpg").write_bytes(b"x")
    result = runner.invoke(app, [str(photos)])
    assert result.exit_code == 1
    assert "Found only 1 images" in result.output
    assert cli_env.calls == []


def test_missing_dependency(
    cli_env: FakeRunner, image_dir: Path, tools_on_path: dict
):
    del tools_on_path["opensplat"]
    result = runner.invoke(app, [str(image_dir)])
    assert result.exit_code == 1
    assert "'opensplat' not found in PATH." in result.output
    assert cli_env.calls == []


def test_reconstruction_failure_shows_tool_output(
    cli_env: FakeRunner, image_dir: Path, tmp_path: Path
):
    cli_env.fail_on = "mapper"
    result = runner.invoke(app, [str(image_dir)])
    assert result.exit_code == 1
    assert "sparse reconstruction failed" in result.output
    assert "mapper exploded" in result.output
    assert not (tmp_path / "splat.ply").exists()


def test_pipeline_config_option(cli_env: FakeRunner, image_dir: Path, tmp_path: Path):
    cfg = tmp_path / "pipeline.yaml"
    cfg.write_text("min_images: 6\n")
    result = runner.invoke(app, [str(image_dir), "--pipeline-config", str(cfg)])
    assert result.exit_code == 1
    assert "Found only 5 images" in result.output


def test_bad_pipeline_config(cli_env: FakeRunner, image_dir: Path, tmp_path: Path):
    result = runner.invoke(app, [str(image_dir), "--pipeline-config", str(tmp_path / "x.yaml")])
    assert result.exit_code == 1
    assert "Pipeline config not found" in result.output


def test_usage_explains_double_dash():
    result = runner.invoke(app, [])
    assert 'A bare "--" is consumed' in result.output


def test_double_dash_is_not_forwarded(cli_env: FakeRunner, image_dir: Path):
    result = runner.invoke(app, [str(image_dir), "--", "--num-iters", "5"])
    assert result.exit_code == 0, result.output
    splat_cmd = cli_env.calls[-1]
    assert "--" not in splat_cmd
    assert splat_cmd[-2:] == ["--num-iters", "5"]


def test_unknown_log_level_is_usage_error(cli_env: FakeRunner, image_dir: Path):
    result = runner.invoke(app, [str(image_dir), "--log-level", "verbose"])
    assert result.exit_code == 1
    assert "Usage: splatpipe <image_dir>" in result.output
    assert "Unknown log level 'verbose'" in result.output
    assert cli_env.calls == []


def test_log_level_is_case_insensitive(
    cli_env: FakeRunner, image_dir: Path, monkeypatch: pytest.MonkeyPatch
):
    levels = []
    monkeypatch.setattr("splatpipe.cli.setup_logging", levels.append)
    result = runner.invoke(app, [str(image_dir), "--log-level", "debug"])
    assert result.exit_code == 0, result.output
    assert levels == ["DEBUG"]


def test_unknown_log_level_in_config(cli_env: FakeRunner, image_dir: Path, tmp_path: Path):
    cfg = tmp_path / "pipeline.yaml"
    cfg.write_text("log_level: chatty\n")
    result = runner.invoke(app, [str(image_dir), "--pipeline-config", str(cfg)])
    assert result.exit_code == 1
    assert "Usage: splatpipe <image_dir>" in result.output
    assert "Invalid pipeline config" in result.output
    assert cli_env.calls == []
