"""Subprocess-based shell runner."""

from __future__ import annotations

import subprocess
from pathlib import Path

from build_helpers.shell.base import ShellResult

SPAWN_FAILURE_EXIT_CODE = 127


class SubprocessShellRunner:
    """Run command strings through the system shell, one at a time.

    There is no timeout: a command that never exits blocks its caller.
    """

    def __init__(self, *, cwd: Path | None = None, env: dict[str, str] | None = None) -> None:
        self._cwd = cwd
        self._env = env

    def run(self, command: str) -> ShellResult:
        try:
            completed = subprocess.run(  # noqa: S602
                command,
                shell=True,
                check=False,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=self._cwd,
                env=self._env,
            )
        except OSError as error:
            return ShellResult(
                exit_code=SPAWN_FAILURE_EXIT_CODE,
                error=f"Command failed to start: {command} ({error})",
            )

        if completed.returncode != 0:
            return ShellResult(
                exit_code=completed.returncode,
                stdout=completed.stdout,
                stderr=completed.stderr,
                error=_failure_message(command, completed.returncode, completed.stderr),
            )
        return ShellResult(
            exit_code=0,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )


def _failure_message(command: str, exit_code: int, stderr: str) -> str:
    message = f"Command failed: {command} (exit code={exit_code})"
    detail = stderr.strip()
    if detail:
        return f"{message}\n{detail}"
    return message
