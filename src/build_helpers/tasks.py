"""Named task targets: which command suites `test` runs, and temp cleanup."""

from __future__ import annotations

import shutil
from collections import deque
from pathlib import Path

from build_helpers.config import TaskSettings
from build_helpers.pipeline import CommandDescriptor

NODE_TARGETS = frozenset({"tasks", "grunt", "node"})
WEB_TARGET = "web"


def resolve_test_tasks(target: str | None, suites: TaskSettings) -> deque[CommandDescriptor]:
    """Build the command queue for ``test[:target]``.

    ``tasks``, ``grunt`` and ``node`` select the node suite, ``web`` the web
    suite; any other target (including none) runs web then node.
    """

    node = [CommandDescriptor(cmd=cmd, dest="test:node") for cmd in suites.node_test_commands]
    web = [CommandDescriptor(cmd=cmd, dest="test:web") for cmd in suites.web_test_commands]

    if target in NODE_TARGETS:
        return deque(node)
    if target == WEB_TARGET:
        return deque(web)
    return deque([*web, *node])


def clear_temp(pattern: str, *, root: Path | None = None) -> list[Path]:
    """Delete every file and directory matching ``pattern`` under ``root``."""

    base = root or Path.cwd()
    removed: list[Path] = []
    for match in sorted(base.glob(pattern)):
        if match.is_dir() and not match.is_symlink():
            shutil.rmtree(match)
        else:
            match.unlink()
        removed.append(match)
    return removed
