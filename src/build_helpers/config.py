"""Runtime configuration for build helpers and task wiring."""

from __future__ import annotations

import os
import shlex
import sys
from dataclasses import dataclass, field

DEFAULT_TEMP_GLOB = "temp/*"
DEFAULT_MD5_CHUNK_SIZE = 64 * 1024


def default_test_command() -> str:
    """Pytest run for the project test suite using the current interpreter."""

    return f"{shlex.quote(sys.executable)} -m pytest tests"


@dataclass(slots=True)
class TaskSettings:
    """Settings for the `test` / `default` task targets."""

    temp_glob: str = DEFAULT_TEMP_GLOB
    node_test_commands: tuple[str, ...] = field(
        default_factory=lambda: (default_test_command(),),
    )
    web_test_commands: tuple[str, ...] = ()


@dataclass(slots=True)
class Settings:
    """Application settings grouped by concern."""

    silent: bool = False
    debug: bool = False
    md5_chunk_size: int = DEFAULT_MD5_CHUNK_SIZE
    tasks: TaskSettings = field(default_factory=TaskSettings)

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment with defaults suitable for local builds."""

        node_command = os.getenv("BUILD_HELPERS_TEST_COMMAND", "").strip()
        web_command = os.getenv("BUILD_HELPERS_WEB_TEST_COMMAND", "").strip()
        return cls(
            silent=_env_bool("BUILD_HELPERS_SILENT", default=False),
            debug=_env_bool("BUILD_HELPERS_DEBUG", default=False),
            md5_chunk_size=_env_int("BUILD_HELPERS_MD5_CHUNK_SIZE", DEFAULT_MD5_CHUNK_SIZE),
            tasks=TaskSettings(
                temp_glob=os.getenv("BUILD_HELPERS_TEMP_GLOB", DEFAULT_TEMP_GLOB),
                node_test_commands=(node_command,) if node_command else (default_test_command(),),
                web_test_commands=(web_command,) if web_command else (),
            ),
        )

    def validate(self) -> None:
        """Raise configuration error on values the helpers cannot work with."""

        if self.md5_chunk_size <= 0:
            raise ValueError("BUILD_HELPERS_MD5_CHUNK_SIZE must be a positive integer.")
        if not self.tasks.temp_glob.strip():
            raise ValueError("BUILD_HELPERS_TEMP_GLOB must not be empty.")
        if os.path.isabs(self.tasks.temp_glob):
            raise ValueError(
                "BUILD_HELPERS_TEMP_GLOB must be relative to the working directory: "
                f"{self.tasks.temp_glob!r}",
            )
        for command in (*self.tasks.node_test_commands, *self.tasks.web_test_commands):
            if not command.strip():
                raise ValueError("Test commands must not be empty.")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as error:
        raise ValueError(f"Invalid integer value for {name}: {raw!r}") from error


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")
