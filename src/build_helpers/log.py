"""Severity-tagged log sink used by the pipelines, plus console setup for the CLI."""

from __future__ import annotations

import logging
import sys
from typing import Protocol

PACKAGE_LOGGER = "build_helpers"
_BANNER_ROW = "#" * 33


class LogSink(Protocol):
    """Four-function logging interface injected into helpers and pipelines."""

    def warn(self, msg: str) -> None: ...

    def info(self, msg: str) -> None: ...

    def error(self, msg: str) -> None: ...

    def debug(self, enabled: bool, msg: str) -> None: ...


class HelperLog:
    """`LogSink` backed by a stdlib logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(PACKAGE_LOGGER)

    def warn(self, msg: str) -> None:
        self._logger.warning(msg)

    def info(self, msg: str) -> None:
        self._logger.info(msg)

    def error(self, msg: str) -> None:
        self._logger.error(msg)

    def debug(self, enabled: bool, msg: str) -> None:
        if not enabled:
            return
        self._logger.debug("DEBUG :: %s", msg)


class _ConsoleHandler(logging.StreamHandler):
    """Plain line handler installed by `configure_logging`."""


def configure_logging(*, debug: bool = False) -> None:
    """Route package log records to stdout as bare lines.

    Safe to call repeatedly: a previously installed console handler is replaced,
    so the handler always writes to the current `sys.stdout`.
    """

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if isinstance(handler, _ConsoleHandler):
            package_logger.removeHandler(handler)

    handler = _ConsoleHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)


def get_warn(message: str) -> str:
    """Wrap a message in a hash-bordered banner so it stands out in build output."""

    return (
        "\n\n\n"
        f"{_BANNER_ROW}\n"
        f"{_BANNER_ROW}"
        "\n\n"
        f"{message}"
        "\n\n"
        f"{_BANNER_ROW}\n"
        f"{_BANNER_ROW}"
    )
