"""Safe subprocess runner for external tools (COLMAP, OpenSplat)."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Shell convention for "command not found".
EXIT_NOT_FOUND = 127


class CommandResult(BaseModel):
    """Exit status and captured output of one external command."""

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = Field(False, description="Killed after exceeding the timeout")

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    def output_tail(self, max_chars: int = 2000) -> str:
        """Last part of the combined output, for diagnostics."""
        combined = "\n".join(s for s in (self.stdout.strip(), self.stderr.strip()) if s)
        return combined[-max_chars:]


class CommandRunner(Protocol):
    def __call__(
        self,
        cmd: Sequence[str],
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> CommandResult: ...


def run_command(
    cmd: Sequence[str],
    cwd: Path | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """Run an external command to completion, capturing its output.

    Never raises for a failing command; callers inspect ``CommandResult.ok``.
    """
    args = [str(c) for c in cmd]
    cmd_str = " ".join(args)
    logger.info(f"Running: {cmd_str}")

    try:
        proc = subprocess.run(
            args,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        logger.error(f"Timed out after {timeout}s: {cmd_str}")
        return CommandResult(
            args=args,
            returncode=-1,
            stdout=_to_text(exc.stdout),
            stderr=_to_text(exc.stderr),
            timed_out=True,
        )
    except FileNotFoundError as exc:
        logger.error(f"Executable not found: {args[0]}")
        return CommandResult(args=args, returncode=EXIT_NOT_FOUND, stderr=str(exc))

    if proc.stdout:
        logger.debug(f"stdout: {proc.stdout[-500:]}")
    if proc.stderr:
        logger.debug(f"stderr: {proc.stderr[-500:]}")

    return CommandResult(
        args=args,
        returncode=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )


def _to_text(data: bytes | str | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
