from __future__ import annotations

import os
import stat
from pathlib import Path

import allure
import pytest

from build_helpers.files import (
    PROJECT_ROOT,
    FileStatError,
    file_exists,
    get_js_targets,
    get_path,
    get_stat,
    md5_file,
)

pytestmark = [
    allure.epic("Build Pipeline"),
    allure.feature("File Helpers"),
]

ABC_MD5 = "900150983cd24fb0d6963f7d28e17f72"


def test_md5_file_matches_known_digest_on_repeated_calls(tmp_path: Path) -> None:
    target = tmp_path / "abc.txt"
    target.write_bytes(b"abc")

    assert md5_file(target) == ABC_MD5
    assert md5_file(target) == ABC_MD5


def test_md5_file_streams_in_small_chunks(tmp_path: Path) -> None:
    target = tmp_path / "abc.txt"
    target.write_bytes(b"abc")

    assert md5_file(target, chunk_size=1) == ABC_MD5


def test_md5_file_invokes_callback_with_digest(tmp_path: Path) -> None:
    target = tmp_path / "abc.txt"
    target.write_bytes(b"abc")
    seen: list[str] = []

    digest = md5_file(target, seen.append)

    assert seen == [digest] == [ABC_MD5]


def test_md5_file_raises_for_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        md5_file(tmp_path / "missing.txt")


@pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
def test_get_stat_reports_symlink_itself(tmp_path: Path) -> None:
    target = tmp_path / "real.js"
    target.write_text("x", "utf-8")
    link = tmp_path / "link.js"
    link.symlink_to(target)

    assert stat.S_ISLNK(get_stat(link).st_mode)
    assert stat.S_ISREG(get_stat(target).st_mode)


def test_get_stat_error_is_prefixed(tmp_path: Path) -> None:
    with pytest.raises(FileStatError) as excinfo:
        get_stat(tmp_path / "missing.js")

    assert str(excinfo.value).startswith("lstat failed:")


@pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
def test_file_exists_accepts_files_and_symlinks_only(tmp_path: Path) -> None:
    regular = tmp_path / "real.js"
    regular.write_text("x", "utf-8")
    dangling = tmp_path / "dangling.js"
    dangling.symlink_to(tmp_path / "gone.js")

    assert file_exists(regular)
    assert file_exists(dangling)
    assert not file_exists(tmp_path)
    assert not file_exists(tmp_path / "missing.js")


def test_get_path_is_relative_to_project_root() -> None:
    assert get_path("temp/out.js") == PROJECT_ROOT / "temp" / "out.js"


def test_get_js_targets_skips_node_modules_and_deps(tmp_path: Path) -> None:
    for relative in (
        "app.js",
        "deps.js",
        "lib/util.js",
        "lib/deps.js",
        "node_modules/pkg/index.js",
        "styles/site.css",
    ):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", "utf-8")

    targets = get_js_targets(tmp_path)

    assert targets == sorted(
        [
            (tmp_path / "app.js").as_posix(),
            (tmp_path / "lib/deps.js").as_posix(),
            (tmp_path / "lib/util.js").as_posix(),
        ],
    )
