"""Command-line fragment builders for shell commands."""

from __future__ import annotations

import glob
from collections.abc import Sequence


def make_param(
    param: str | Sequence[str] | None,
    directive: str,
    *,
    no_space: bool = False,
    parse_path: bool = False,
) -> str:
    """Build a parameter fragment to append to a shell command.

    ``make_param("path/to", "-p")`` gives ``" -p path/to"``; a list repeats the
    directive for each item (``" -p one -p two"``) and ``None`` gives just
    ``" -p"``. With ``no_space`` the value is glued to the directive. With
    ``parse_path`` each value is treated as a glob pattern and replaced by its
    sorted matches, joined by spaces rather than commas so the fragment stays
    a valid list of shell arguments.
    """

    sp = "" if no_space else " "

    if param is None:
        return f" {directive}"

    if isinstance(param, (list, tuple)):
        values = [_expand(item) if parse_path else str(item) for item in param]
        return f" {directive}{sp}" + f" {directive}{sp}".join(values)

    value = _expand(param) if parse_path else str(param)
    return f" {directive}{sp}{value}"


def _expand(pattern: str) -> str:
    return " ".join(sorted(glob.glob(pattern, recursive=True)))
