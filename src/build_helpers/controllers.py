"""Controllers for build-helpers CLI commands."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from pathlib import Path

from build_helpers.config import Settings
from build_helpers.files import get_js_targets, md5_file
from build_helpers.log import HelperLog, LogSink, get_warn
from build_helpers.pipeline import (
    CommandDescriptor,
    OutputFile,
    StatsOptions,
    run_commands,
    run_stats,
)
from build_helpers.shell import ShellRunner
from build_helpers.tasks import clear_temp, resolve_test_tasks


@dataclass(slots=True)
class RunCommandsCommand:
    """CLI input for a sequential command run."""

    commands: tuple[str, ...]
    dests: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()
    stats: bool = False
    silent: bool | None = None


@dataclass(slots=True)
class StatsCommand:
    """CLI input for artifact size statistics."""

    paths: tuple[Path, ...]


@dataclass(slots=True)
class Md5Command:
    """CLI input for file hashing."""

    paths: tuple[Path, ...]


@dataclass(slots=True)
class JsTargetsCommand:
    """CLI input for JavaScript target discovery."""

    directory: Path


@dataclass(slots=True)
class RunTestsCommand:
    """CLI input for the `test` task."""

    target: str | None
    silent: bool | None = None
    debug: bool = False


@dataclass(slots=True)
class CommandOutcome:
    """Lines to print plus overall status."""

    success: bool
    lines: list[str] = field(default_factory=list)


class BuildCliController:
    """Wire CLI inputs to pipelines using environment settings."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        runner: ShellRunner | None = None,
        log: LogSink | None = None,
    ) -> None:
        self._settings = settings
        self._runner = runner
        self._log = log

    def run(self, command: RunCommandsCommand) -> CommandOutcome:
        settings = self._load_settings()
        silent = settings.silent if command.silent is None else command.silent
        descriptors = _build_descriptors(command)

        result = run_commands(
            deque(descriptors),
            silent=silent,
            log=self._sink(),
            runner=self._runner,
        )
        if not result.success:
            return CommandOutcome(success=False, lines=_failure_lines(result.stderr, result.stdout))

        lines = [f"Commands completed: {result.executed}"]
        if not command.stats:
            return CommandOutcome(success=True, lines=lines)

        stats = run_stats(deque(descriptors), StatsOptions(compile=True), log=self._sink())
        lines.append(
            f"Statistics: processed={stats.processed} skipped={stats.skipped} "
            f"unavailable={stats.unavailable}",
        )
        return CommandOutcome(success=stats.unavailable == 0, lines=lines)

    def stats(self, command: StatsCommand) -> CommandOutcome:
        descriptors = deque(
            CommandDescriptor(cmd="", dest=str(path), file=OutputFile(dest=str(path)))
            for path in command.paths
        )
        result = run_stats(descriptors, StatsOptions(compile=True), log=self._sink())
        return CommandOutcome(
            success=result.unavailable == 0,
            lines=[f"Statistics: processed={result.processed} unavailable={result.unavailable}"],
        )

    def md5(self, command: Md5Command) -> CommandOutcome:
        settings = self._load_settings()
        lines: list[str] = []
        success = True
        for path in command.paths:
            try:
                digest = md5_file(path, chunk_size=settings.md5_chunk_size)
            except OSError as error:
                self._sink().error(f"Could not hash {path}: {error}")
                success = False
                continue
            lines.append(f"{digest}  {path}")
        return CommandOutcome(success=success, lines=lines)

    def js_targets(self, command: JsTargetsCommand) -> CommandOutcome:
        return CommandOutcome(success=True, lines=get_js_targets(command.directory))

    def test(self, command: RunTestsCommand) -> CommandOutcome:
        settings = self._load_settings()
        silent = settings.silent if command.silent is None else command.silent
        sink = self._sink()

        for removed in clear_temp(settings.tasks.temp_glob):
            sink.debug(command.debug or settings.debug, f"Removed {removed}")

        queue = resolve_test_tasks(command.target, settings.tasks)
        if not queue:
            sink.warn(get_warn(f"No test commands configured for target: {command.target}"))
            return CommandOutcome(success=True, lines=["Test commands completed: 0"])

        result = run_commands(queue, silent=silent, log=sink, runner=self._runner)
        if not result.success:
            return CommandOutcome(success=False, lines=_failure_lines(result.stderr, result.stdout))
        return CommandOutcome(success=True, lines=[f"Test commands completed: {result.executed}"])

    def _load_settings(self) -> Settings:
        settings = self._settings or Settings.from_env()
        settings.validate()
        return settings

    def _sink(self) -> LogSink:
        if self._log is None:
            self._log = HelperLog()
        return self._log


def _build_descriptors(command: RunCommandsCommand) -> list[CommandDescriptor]:
    if len(command.dests) > len(command.commands) or len(command.outputs) > len(command.commands):
        raise ValueError("--dest and --output may not be given more often than --command.")

    descriptors: list[CommandDescriptor] = []
    for index, cmd in enumerate(command.commands):
        dest = command.dests[index] if index < len(command.dests) else None
        output = command.outputs[index] if index < len(command.outputs) else None
        descriptors.append(
            CommandDescriptor(
                cmd=cmd,
                dest=dest,
                file=OutputFile(dest=output) if output else None,
            ),
        )
    return descriptors


def _failure_lines(stderr: str | None, stdout: str | None) -> list[str]:
    lines: list[str] = []
    if stderr and stderr.strip():
        lines.append(f"stderr: {stderr.strip()}")
    if stdout and stdout.strip():
        lines.append(f"stdout: {stdout.strip()}")
    return lines
