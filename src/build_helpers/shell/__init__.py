"""Shell execution primitives."""

from build_helpers.shell.base import ShellResult, ShellRunner
from build_helpers.shell.executor import execute_command
from build_helpers.shell.params import make_param
from build_helpers.shell.subprocess_runner import SubprocessShellRunner

__all__ = [
    "ShellResult",
    "ShellRunner",
    "SubprocessShellRunner",
    "execute_command",
    "make_param",
]
