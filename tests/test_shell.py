from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
from pathlib import Path

import allure

from build_helpers.shell import ShellResult, SubprocessShellRunner, execute_command, make_param

pytestmark = [
    allure.epic("Build Pipeline"),
    allure.feature("Shell Execution"),
]


def _python(code: str) -> str:
    args = [sys.executable, "-c", code]
    if os.name == "nt":
        return subprocess.list2cmdline(args)
    return shlex.join(args)


def test_subprocess_runner_captures_stdout() -> None:
    result = SubprocessShellRunner().run(_python("print('hello')"))

    assert result.ok
    assert result.exit_code == 0
    assert result.stdout.strip() == "hello"


def test_subprocess_runner_reports_non_zero_exit() -> None:
    command = _python("import sys; sys.stderr.write('bad input'); sys.exit(3)")

    result = SubprocessShellRunner().run(command)

    assert not result.ok
    assert result.exit_code == 3
    assert result.stderr == "bad input"
    assert result.error is not None
    assert "exit code=3" in result.error
    assert result.error.endswith("bad input")


def test_subprocess_runner_replaces_undecodable_bytes() -> None:
    command = _python(
        "import sys; sys.stdout.buffer.write(b'\\xff\\xfe'); "
        "sys.stderr.buffer.write(b'\\xff\\xfe'); sys.exit(1)",
    )

    result = SubprocessShellRunner().run(command)

    assert not result.ok
    assert result.stdout == "\ufffd\ufffd"
    assert result.stderr == "\ufffd\ufffd"


def test_subprocess_runner_uses_working_directory(tmp_path: Path) -> None:
    runner = SubprocessShellRunner(cwd=tmp_path)

    result = runner.run(_python("import os; print(os.getcwd())"))

    assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()


def test_execute_command_logs_command_and_output(caplog) -> None:
    caplog.set_level(logging.INFO, logger="build_helpers")
    command = _python("print('built')")

    result = execute_command(command)

    assert result.ok
    assert caplog.messages[0] == f"Executing: {command}"
    assert caplog.messages[1].strip() == "built"


def test_execute_command_falls_back_to_stderr_output(caplog) -> None:
    caplog.set_level(logging.INFO, logger="build_helpers")
    command = _python("import sys; sys.stderr.write('warning only')")

    execute_command(command)

    assert caplog.messages[-1] == "warning only"


def test_execute_command_failure_is_logged_even_when_silent(caplog) -> None:
    caplog.set_level(logging.INFO, logger="build_helpers")

    class FailingRunner:
        def run(self, command: str) -> ShellResult:
            return ShellResult(exit_code=1, error=f"Command failed: {command}")

    result = execute_command("compile", silent=True, runner=FailingRunner())

    assert not result.ok
    assert caplog.messages == ["Command failed: compile"]
    assert caplog.records[0].levelno == logging.ERROR


def test_make_param_single_value() -> None:
    assert make_param("path/to", "-p") == " -p path/to"
    assert make_param("path/to", "--js=", no_space=True) == " --js=path/to"


def test_make_param_repeats_directive_for_lists() -> None:
    assert make_param(["one", "two"], "-p") == " -p one -p two"
    assert make_param(("a", "b"), "--js=", no_space=True) == " --js=a --js=b"


def test_make_param_none_yields_bare_directive() -> None:
    assert make_param(None, "--debug") == " --debug"


def test_make_param_expands_globs(tmp_path: Path) -> None:
    for name in ("b.js", "a.js", "c.css"):
        (tmp_path / name).write_text("", "utf-8")
    pattern = str(tmp_path / "*.js")

    expanded = f"{tmp_path / 'a.js'} {tmp_path / 'b.js'}"
    assert make_param(pattern, "--js", parse_path=True) == f" --js {expanded}"
    assert make_param([pattern], "--js", parse_path=True) == f" --js {expanded}"
