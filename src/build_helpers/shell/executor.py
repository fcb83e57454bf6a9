"""Single shell command execution with progress logging."""

from __future__ import annotations

import logging

from build_helpers.log import HelperLog, LogSink
from build_helpers.shell.base import ShellResult, ShellRunner
from build_helpers.shell.subprocess_runner import SubprocessShellRunner

logger = logging.getLogger(__name__)


def execute_command(
    command: str,
    *,
    silent: bool = False,
    log: LogSink | None = None,
    runner: ShellRunner | None = None,
) -> ShellResult:
    """Run `command` through the shell and log progress unless `silent`.

    Failures are logged at error level regardless of `silent` and returned as a
    non-ok `ShellResult`; nothing is raised.
    """

    sink = log or HelperLog(logger)
    shell = runner or SubprocessShellRunner()

    if not silent:
        sink.info(f"Executing: {command}")

    result = shell.run(command)
    if not result.ok:
        sink.error(result.error or f"Command failed: {command} (exit code={result.exit_code})")
        return result

    if not silent:
        sink.info(result.stdout or result.stderr)
    return result
