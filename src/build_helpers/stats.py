"""Compiled vs. gzip size statistics for build artifacts."""

from __future__ import annotations

import gzip
import logging
import zlib
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from build_helpers.log import HelperLog, LogSink

logger = logging.getLogger(__name__)

# zlib's default compression level.
GZIP_LEVEL = 6


class GzipError(RuntimeError):
    """Reading or compressing a file for size statistics failed."""


@dataclass(frozen=True, slots=True)
class FileStats:
    """Size report for one artifact."""

    path: str
    compiled_size: int
    gzip_size: int

    @property
    def reduction(self) -> float:
        """Share of bytes saved by gzip, in percent (positive when smaller)."""

        if self.compiled_size == 0:
            return 0.0
        return (1 - self.gzip_size / self.compiled_size) * 100

    @property
    def percent(self) -> float:
        """Signed size change: negative when gzip shrinks the artifact."""

        return -self.reduction

    @property
    def percent_text(self) -> str:
        return f"-{self.reduction:.2f}%"

    def report_lines(self) -> list[str]:
        return [
            f"Compiled size:\t{_kib(self.compiled_size)} kb \t({self.compiled_size} bytes)",
            f"GZipped size:\t{_kib(self.gzip_size)} kb \t({self.gzip_size} bytes) "
            f"{self.percent_text}",
        ]


def gzip_file(path: str | Path) -> bytes:
    """Read the whole file and return its gzip-compressed bytes."""

    try:
        data = Path(path).read_bytes()
        return gzip.compress(data, compresslevel=GZIP_LEVEL, mtime=0)
    except (OSError, zlib.error, ValueError) as error:
        raise GzipError(f"gzip failed for {path}: {error}") from error


def gzip_size(path: str | Path) -> int | None:
    """Compressed size of a file in bytes, or ``None`` when it cannot be computed."""

    try:
        return len(gzip_file(path))
    except GzipError as error:
        logger.debug("%s", error)
        return None


def generate_stats(
    path: str | Path,
    on_done: Callable[[bool], None] | None = None,
    *,
    log: LogSink | None = None,
) -> FileStats | None:
    """Compute and log compiled/gzip sizes for one artifact.

    Returns ``None`` and reports ``on_done(False)`` when the gzip size is
    unavailable or zero; otherwise logs the report and reports ``on_done(True)``.
    """

    sink = log or HelperLog(logger)
    done = on_done or _noop

    compressed = gzip_size(path)
    if not compressed:
        done(False)
        return None

    try:
        compiled_size = len(Path(path).read_bytes())
    except OSError as error:
        sink.error(f"Could not read {path}: {error}")
        done(False)
        return None

    stats = FileStats(path=str(path), compiled_size=compiled_size, gzip_size=compressed)
    for line in stats.report_lines():
        sink.info(line)

    done(True)
    return stats


def _kib(size: int) -> str:
    return f"{size / 1024:.2f}"


def _noop(*_args: object) -> None:
    return None
