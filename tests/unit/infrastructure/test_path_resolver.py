from __future__ import annotations

import os
from pathlib import Path

import pytest

from infrastructure.storage import WorkDirPathResolver, to_logical_name, to_slash


def test_resolve_joins_under_work_dir(tmp_path: Path) -> None:
    resolver = WorkDirPathResolver(tmp_path)

    assert resolver.resolve("a/b.txt") == tmp_path / "a" / "b.txt"
    assert resolver.resolve("") == tmp_path
    # 先頭の区切り文字でワークディレクトリの外に出ない
    assert resolver.resolve("/a") == tmp_path / "a"
    assert resolver.resolve("a//b/./c") == tmp_path / "a" / "b" / "c"


def test_resolve_does_not_guard_traversal(tmp_path: Path) -> None:
    resolver = WorkDirPathResolver(tmp_path / "root")

    assert resolver.resolve("../outside") == tmp_path / "outside"


@pytest.mark.parametrize("path", ["a", "a/b", "a/b/c.txt", "dir/with space/file"])
def test_resolve_round_trips_to_logical_name(tmp_path: Path, path: str) -> None:
    resolver = WorkDirPathResolver(tmp_path)

    assert resolver.to_name(resolver.resolve(path)) == path


def test_to_name_of_work_dir_is_empty(tmp_path: Path) -> None:
    resolver = WorkDirPathResolver(tmp_path)

    assert resolver.to_name(tmp_path) == ""


def test_resolve_is_injective(tmp_path: Path) -> None:
    resolver = WorkDirPathResolver(tmp_path)
    paths = ["a", "b", "a/b", "b/a", "ab", "a.b"]

    resolved = {resolver.resolve(path) for path in paths}

    assert len(resolved) == len(paths)


def test_relative_work_dir_is_made_absolute(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    resolver = WorkDirPathResolver(Path("data"))

    assert resolver.work_dir == Path(os.getcwd()) / "data"
    assert resolver.work_dir.is_absolute()


def test_default_work_dir_is_filesystem_root() -> None:
    assert WorkDirPathResolver().work_dir == Path(os.path.abspath(os.sep))


def test_ensure_parent_dir_creates_intermediate_directories(tmp_path: Path) -> None:
    resolver = WorkDirPathResolver(tmp_path)

    absolute = resolver.ensure_parent_dir("x/y/z.bin")

    assert (tmp_path / "x" / "y").is_dir()
    assert not (tmp_path / "x" / "y" / "z.bin").exists()
    assert absolute == tmp_path / "x" / "y" / "z.bin"


def test_ensure_parent_dir_fails_when_parent_is_file(tmp_path: Path) -> None:
    (tmp_path / "blocker").write_bytes(b"")
    resolver = WorkDirPathResolver(tmp_path)

    with pytest.raises(OSError):
        resolver.ensure_parent_dir("blocker/child.txt")


def test_logical_name_helpers() -> None:
    assert to_logical_name("", "a.txt") == "a.txt"
    assert to_logical_name("dir/", "a.txt") == "dir/a.txt"
    assert to_logical_name(".", "a.txt") == "a.txt"
    assert to_logical_name("a//b/./c", "d") == "a/b/c/d"
    assert to_slash("a/b") == "a/b"
