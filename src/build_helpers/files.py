"""File hashing, stat and lookup helpers."""

from __future__ import annotations

import hashlib
import os
import stat
from collections.abc import Callable
from pathlib import Path

from build_helpers.config import DEFAULT_MD5_CHUNK_SIZE

PROJECT_ROOT = Path(__file__).resolve().parent.parent
JS_TARGET_EXCLUDES = ("node_modules", "deps.js")


class FileStatError(RuntimeError):
    """lstat on a path failed."""


def md5_file(
    path: str | Path,
    on_digest: Callable[[str], None] | None = None,
    *,
    chunk_size: int = DEFAULT_MD5_CHUNK_SIZE,
) -> str:
    """Stream a file through MD5 and return the lowercase hex digest.

    ``on_digest`` is called with the same digest before returning.
    """

    digest = hashlib.md5(usedforsecurity=False)  # noqa: S324
    with Path(path).open("rb") as handle:
        for chunk in iter(lambda: handle.read(chunk_size), b""):
            digest.update(chunk)

    hexdigest = digest.hexdigest()
    if on_digest is not None:
        on_digest(hexdigest)
    return hexdigest


def get_stat(path: str | Path) -> os.stat_result:
    """``os.lstat`` that reports symlinks as themselves."""

    try:
        return os.lstat(path)
    except OSError as error:
        raise FileStatError(f"lstat failed:{error}") from error


def file_exists(path: str | Path) -> bool:
    """True for regular files and symlinks (dangling ones included)."""

    try:
        mode = os.lstat(path).st_mode
    except OSError:
        return False
    return stat.S_ISREG(mode) or stat.S_ISLNK(mode)


def get_path(file_path: str | Path) -> Path:
    return PROJECT_ROOT / file_path


def get_js_targets(directory: str | Path) -> list[str]:
    """All ``.js`` files under ``directory`` except vendored ``node_modules`` and ``deps.js``."""

    root = Path(directory)
    targets: list[str] = []
    for candidate in root.glob("**/*.js"):
        relative = candidate.relative_to(root)
        if relative.parts[0] in JS_TARGET_EXCLUDES:
            continue
        targets.append(candidate.as_posix())
    return sorted(targets)
