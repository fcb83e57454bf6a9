"""Shared test fixtures."""

from __future__ import annotations

import logging

import pytest

from build_helpers.shell import ShellResult


class FakeShellRunner:
    """Record commands and answer from a scripted table."""

    def __init__(self, failures: dict[str, ShellResult] | None = None) -> None:
        self.calls: list[str] = []
        self._failures = failures or {}

    def run(self, command: str) -> ShellResult:
        self.calls.append(command)
        if command in self._failures:
            return self._failures[command]
        return ShellResult(exit_code=0, stdout=f"ran {command}\n")


@pytest.fixture()
def fake_shell():
    return FakeShellRunner


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Undo CLI logging setup so later tests do not write to a closed stream."""
    package_logger = logging.getLogger("build_helpers")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
