from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from interfaces.cli.app import create_cli

runner = CliRunner()


def _invoke(work_dir: Path, *args: str, input: bytes | None = None):
    return runner.invoke(create_cli(), ["storage", "--work-dir", str(work_dir), *args], input=input)


def test_put_then_cat_round_trip(tmp_path: Path) -> None:
    source = tmp_path / "source.txt"
    source.write_bytes(b"0123456789")
    work_dir = tmp_path / "work"

    put = _invoke(work_dir, "put", "docs/digits.txt", "--source", str(source))
    assert put.exit_code == 0, put.output
    assert (work_dir / "docs" / "digits.txt").read_bytes() == b"0123456789"

    cat = _invoke(work_dir, "cat", "docs/digits.txt", "--offset", "2", "--size", "3")
    assert cat.exit_code == 0, cat.output
    assert cat.stdout == "234"


def test_put_reads_stdin_by_default(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "put", "from-stdin.bin", input=b"piped")

    assert result.exit_code == 0, result.output
    assert (tmp_path / "from-stdin.bin").read_bytes() == b"piped"


def test_stat_and_ls_print_json(tmp_path: Path) -> None:
    (tmp_path / "dir" / "sub").mkdir(parents=True)
    (tmp_path / "dir" / "data.json").write_text("{}", encoding="utf-8")

    stat = _invoke(tmp_path, "stat", "dir/data.json")
    assert stat.exit_code == 0, stat.output
    payload = json.loads(stat.stdout)
    assert payload["type"] == "file"
    assert payload["content_type"] == "application/json"

    listing = _invoke(tmp_path, "ls", "dir")
    assert listing.exit_code == 0, listing.output
    entries = {entry["name"]: entry["type"] for entry in map(json.loads, listing.stdout.splitlines())}
    assert entries == {"dir/sub": "dir", "dir/data.json": "file"}


def test_stat_dash_reports_stream(tmp_path: Path) -> None:
    result = _invoke(tmp_path / "missing", "stat", "-")

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["type"] == "stream"


def test_cp_mv_rm(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_bytes(b"payload")

    assert _invoke(tmp_path, "cp", "a.txt", "copies/b.txt").exit_code == 0
    assert (tmp_path / "copies" / "b.txt").read_bytes() == b"payload"

    assert _invoke(tmp_path, "mv", "copies/b.txt", "moved/c.txt").exit_code == 0
    assert not (tmp_path / "copies" / "b.txt").exists()
    assert (tmp_path / "moved" / "c.txt").read_bytes() == b"payload"

    assert _invoke(tmp_path, "rm", "a.txt").exit_code == 0
    assert not (tmp_path / "a.txt").exists()


def test_missing_entry_exits_with_error(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "rm", "missing.txt")

    assert result.exit_code == 1
    assert "error:" in result.output


def test_meta_prints_work_dir(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "meta")

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["work_dir"] == str(tmp_path)


def test_configured_env_is_quiet_without_verbose() -> None:
    result = runner.invoke(create_cli(), ["storage", "--env", "dev", "stat", "-"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["type"] == "stream"
    assert "DEBUG" not in result.output


def test_verbose_overrides_configured_log_level() -> None:
    result = runner.invoke(create_cli(), ["storage", "--env", "dev", "-v", "stat", "-"])

    assert result.exit_code == 0, result.output
    assert "DEBUG localfs_storage.storage.filesystem: stat" in result.output


def test_verbose_with_work_dir_logs_operations(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "stat", "-")
    assert "DEBUG" not in result.output

    verbose = runner.invoke(create_cli(), ["storage", "--work-dir", str(tmp_path), "-v", "stat", "-"])

    assert verbose.exit_code == 0, verbose.output
    assert "DEBUG localfs_storage.storage.filesystem: stat" in verbose.output
