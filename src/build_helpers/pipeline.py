"""Sequential fail-fast runners for build commands and artifact statistics.

Both runners drain a queue of `CommandDescriptor` strictly from the left, one
item at a time, and report through a single completion callback in addition to
their return value. Nothing runs concurrently and nothing is retried.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, MutableSequence
from dataclasses import dataclass

from build_helpers.log import HelperLog, LogSink
from build_helpers.shell import ShellRunner, execute_command
from build_helpers.stats import generate_stats

logger = logging.getLogger(__name__)

UNDEFINED_DEST = "undefined"

CommandQueue = MutableSequence["CommandDescriptor"]


@dataclass(frozen=True, slots=True)
class OutputFile:
    """Artifact produced by a build command."""

    dest: str


@dataclass(frozen=True, slots=True)
class CommandDescriptor:
    """One shell command plus the label used to attribute its logs."""

    cmd: str
    dest: str | None = None
    file: OutputFile | None = None

    @property
    def label(self) -> str:
        return self.dest if isinstance(self.dest, str) else UNDEFINED_DEST


@dataclass(slots=True)
class StatsOptions:
    """Options for `run_stats`; `compile` is false when nothing was built."""

    compile: bool = True


@dataclass(slots=True)
class CommandRunResult:
    """Outcome of a `run_commands` pass."""

    success: bool
    executed: int
    stderr: str | None = None
    stdout: str | None = None
    failed: CommandDescriptor | None = None


@dataclass(slots=True)
class StatsRunResult:
    """Outcome of a `run_stats` pass."""

    success: bool
    processed: int = 0
    skipped: int = 0
    unavailable: int = 0


def run_commands(
    commands: CommandQueue,
    on_done: Callable[..., None] | None = None,
    *,
    silent: bool = False,
    log: LogSink | None = None,
    runner: ShellRunner | None = None,
) -> CommandRunResult:
    """Execute each queued command in order, stopping at the first failure.

    The queue is consumed in place. On success ``on_done(True)`` fires once the
    queue is empty; on failure ``on_done(False, stderr, stdout)`` fires and the
    remaining descriptors stay in the queue unexecuted.
    """

    sink = log or HelperLog(logger)
    executed = 0

    while commands:
        descriptor = _pop_head(commands)
        result = execute_command(descriptor.cmd, silent=silent, log=sink, runner=runner)
        executed += 1

        if not result.ok:
            sink.error(f"FAILED to run command for target: {descriptor.label}")
            if on_done is not None:
                on_done(False, result.stderr, result.stdout)
            return CommandRunResult(
                success=False,
                executed=executed,
                stderr=result.stderr,
                stdout=result.stdout,
                failed=descriptor,
            )

        if not silent:
            sink.info(f"Command complete for target: {descriptor.label}")

    if on_done is not None:
        on_done(True)
    return CommandRunResult(success=True, executed=executed)


def run_stats(
    commands: CommandQueue,
    options: StatsOptions,
    on_done: Callable[[bool], None] | None = None,
    *,
    log: LogSink | None = None,
) -> StatsRunResult:
    """Log compiled/gzip size statistics for each descriptor's output file.

    Does nothing when ``options.compile`` is false. Descriptors without an
    output file path are skipped with a warning. A failed statistic does not
    stop the pass.
    """

    sink = log or HelperLog(logger)
    result = StatsRunResult(success=True)

    if not options.compile:
        if on_done is not None:
            on_done(True)
        return result

    while commands:
        descriptor = _pop_head(commands)
        dest = descriptor.file.dest if descriptor.file is not None else None
        if not dest:
            sink.warn(
                f"Skipping file statistics for target: {descriptor.label} (no output file)",
            )
            result.skipped += 1
            continue

        sink.info(f"File statistics for {dest}")
        if generate_stats(dest, log=sink) is None:
            result.unavailable += 1
        result.processed += 1

    if on_done is not None:
        on_done(True)
    return result


def _pop_head(commands: CommandQueue) -> CommandDescriptor:
    if isinstance(commands, deque):
        return commands.popleft()
    return commands.pop(0)
