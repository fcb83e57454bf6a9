"""Shell runner interface used by the command pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True)
class ShellResult:
    """Outcome of one shell invocation."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.exit_code == 0


class ShellRunner(Protocol):
    """Protocol implemented by shell runners."""

    def run(self, command: str) -> ShellResult:
        """Run one shell command to completion and capture its output."""
