"""CLI entrypoint for build-helpers."""

from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

import rich_click as click

from build_helpers import __version__
from build_helpers.config import Settings
from build_helpers.controllers import (
    BuildCliController,
    CommandOutcome,
    JsTargetsCommand,
    Md5Command,
    RunCommandsCommand,
    RunTestsCommand,
    StatsCommand,
)
from build_helpers.log import configure_logging

click.rich_click.USE_MARKDOWN = True
BUILD_CONTROLLER = BuildCliController()

CommandT = TypeVar("CommandT")


@click.group()
@click.version_option(version=__version__, prog_name="build-helpers")
@click.option(
    "--debug/--no-debug",
    default=None,
    help="Verbose output. Defaults to BUILD_HELPERS_DEBUG.",
)
@click.pass_context
def build_helpers(ctx: click.Context, debug: bool | None) -> None:
    """Build-task helpers: command chains, artifact stats and hashes."""

    if debug is None:
        try:
            debug = Settings.from_env().debug
        except ValueError as error:
            raise click.ClickException(str(error)) from error
    configure_logging(debug=debug)
    ctx.obj = debug


@build_helpers.command("run")
@click.option(
    "--command",
    "-c",
    "commands",
    multiple=True,
    required=True,
    help="Shell command to run. Can be repeated; commands run in the given order.",
)
@click.option(
    "--dest",
    "dests",
    multiple=True,
    help="Target label for the command at the same position.",
)
@click.option(
    "--output",
    "outputs",
    multiple=True,
    help="Output file produced by the command at the same position.",
)
@click.option(
    "--stats/--no-stats",
    default=False,
    show_default=True,
    help=(
        "Print compiled and gzip size of every --output after all commands succeed. "
        "Fails when an output file cannot be measured."
    ),
)
@click.option(
    "--silent/--no-silent",
    default=None,
    help="Suppress progress output. Defaults to BUILD_HELPERS_SILENT.",
)
def run(  # noqa: PLR0913
    commands: tuple[str, ...],
    dests: tuple[str, ...],
    outputs: tuple[str, ...],
    stats: bool,
    silent: bool | None,
) -> None:
    """Run shell commands one after another, stopping at the first failure."""

    outcome = _call(
        BUILD_CONTROLLER.run,
        RunCommandsCommand(
            commands=commands,
            dests=dests,
            outputs=outputs,
            stats=stats,
            silent=silent,
        ),
    )
    _finish(outcome, "Command run failed.")


@build_helpers.command("stats")
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
def stats(paths: tuple[Path, ...]) -> None:
    """Print compiled and gzip size for build artifacts."""

    _finish(_call(BUILD_CONTROLLER.stats, StatsCommand(paths=paths)), "Statistics unavailable.")


@build_helpers.command("md5")
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
def md5(paths: tuple[Path, ...]) -> None:
    """Print the MD5 hash of each file."""

    _finish(_call(BUILD_CONTROLLER.md5, Md5Command(paths=paths)), "Hashing failed.")


@build_helpers.command("js-targets")
@click.argument(
    "directory",
    type=click.Path(path_type=Path, exists=True, file_okay=False),
)
def js_targets(directory: Path) -> None:
    """List .js files under DIRECTORY, excluding node_modules and deps.js."""

    _finish(_call(BUILD_CONTROLLER.js_targets, JsTargetsCommand(directory=directory)), "")


@build_helpers.command("test")
@click.argument("target", required=False)
@click.option(
    "--silent/--no-silent",
    default=None,
    help="Suppress progress output. Defaults to BUILD_HELPERS_SILENT.",
)
def test(target: str | None, silent: bool | None) -> None:
    """Clear temp files and run test suites.

    TARGET is `tasks`, `grunt` or `node` for the node suite, `web` for the web
    suite; omit it to run both.
    """

    _run_test_task(target, silent)


@build_helpers.command("default")
def default() -> None:
    """Run the `test` task for all targets."""

    _run_test_task(None, None)


def _run_test_task(target: str | None, silent: bool | None) -> None:
    debug = bool(click.get_current_context().obj)
    outcome = _call(
        BUILD_CONTROLLER.test,
        RunTestsCommand(target=target, silent=silent, debug=debug),
    )
    _finish(outcome, "Test task failed.")


def _call(handler: Callable[[CommandT], CommandOutcome], command: CommandT) -> CommandOutcome:
    try:
        return handler(command)
    except ValueError as error:
        raise click.ClickException(str(error)) from error


def _finish(outcome: CommandOutcome, failure_message: str) -> None:
    _emit_lines(outcome.lines)
    if not outcome.success:
        raise click.ClickException(failure_message)


def _emit_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    build_helpers()
