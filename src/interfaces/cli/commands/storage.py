"""
ローカルストレージ操作の CLI コマンド。
"""

from __future__ import annotations

import json
import logging
from contextlib import ExitStack
from pathlib import Path
from typing import NoReturn, cast

import typer

from bootstrap import ROOT_LOGGER_NAME, BootstrapError, configure_console_logging
from domain import ListDirOptions, ReadOptions, StorageObject, WriteOptions
from infrastructure.storage import LocalFileSystemStorage, StorageBackend, StorageError, copy_buffer
from runtime import bootstrap

app = typer.Typer(help="ローカルストレージ操作コマンド")


@app.callback()
def main(
    ctx: typer.Context,
    work_dir: Path | None = typer.Option(
        None,
        "--work-dir",
        help="storage.work_dir を明示的に上書き",
    ),
    env: str = typer.Option("dev", "--env", help="SERVICE_ENV"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="操作ログを出力"),
) -> None:
    if work_dir is not None:
        configure_console_logging(logging.DEBUG if verbose else logging.WARNING)
        ctx.obj = LocalFileSystemStorage(work_dir)
        return
    try:
        ctx.obj = bootstrap(environment=env).storage
    except BootstrapError as exc:
        _fail(exc)
    # logging.yaml の適用後に上書きする
    if verbose:
        logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.DEBUG)


@app.command("meta")
def meta(ctx: typer.Context) -> None:
    """ストレージのメタデータを表示する。"""

    typer.echo(json.dumps(_storage(ctx).metadata().to_dict(), ensure_ascii=False))


@app.command("stat")
def stat(ctx: typer.Context, path: str = typer.Argument(..., help="論理パス。'-' は標準入力")) -> None:
    """エントリのメタデータを JSON で表示する。"""

    try:
        obj = _storage(ctx).stat(path)
    except (OSError, StorageError) as exc:
        _fail(exc)
    _echo_object(obj)


@app.command("ls")
def ls(
    ctx: typer.Context,
    dir: str = typer.Argument("", help="論理ディレクトリ"),
    follow_links: bool = typer.Option(False, "--follow-links", help="シンボリックリンクを辿る"),
) -> None:
    """ディレクトリ直下のエントリを 1 行 1 JSON で表示する。"""

    options = ListDirOptions(follow_links=follow_links, on_dir=_echo_object, on_file=_echo_object)
    try:
        _storage(ctx).list_dir(dir, options)
    except (OSError, StorageError) as exc:
        _fail(exc)


@app.command("cat")
def cat(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="論理パス"),
    offset: int | None = typer.Option(None, "--offset", min=0, help="読み込み開始位置"),
    size: int | None = typer.Option(None, "--size", min=0, help="読み込む最大バイト数"),
) -> None:
    """ファイルの内容を標準出力へ書き出す。"""

    stdout = typer.get_binary_stream("stdout")
    try:
        with _storage(ctx).read(path, ReadOptions(offset=offset, size=size)) as stream:
            copy_buffer(stdout, stream)
    except (OSError, StorageError) as exc:
        _fail(exc)
    stdout.flush()


@app.command("put")
def put(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="書き込み先の論理パス。'-' は標準出力"),
    source: Path | None = typer.Option(None, "--source", help="入力ファイル。省略時は標準入力"),
    size: int | None = typer.Option(None, "--size", min=0, help="書き込むバイト数"),
) -> None:
    """入力の内容を書き込む。"""

    try:
        with ExitStack() as stack:
            if source is None:
                reader = typer.get_binary_stream("stdin")
            else:
                reader = stack.enter_context(source.open("rb"))
            written = _storage(ctx).write(path, reader, WriteOptions(size=size))
    except (OSError, StorageError) as exc:
        _fail(exc)
    typer.echo(f"{written} bytes written to {path}", err=True)


@app.command("cp")
def cp(ctx: typer.Context, src: str = typer.Argument(...), dst: str = typer.Argument(...)) -> None:
    """src を dst にコピーする。"""

    try:
        written = _storage(ctx).copy(src, dst)
    except (OSError, StorageError) as exc:
        _fail(exc)
    typer.echo(f"{written} bytes copied from {src} to {dst}", err=True)


@app.command("mv")
def mv(ctx: typer.Context, src: str = typer.Argument(...), dst: str = typer.Argument(...)) -> None:
    """src を dst に移動する。"""

    try:
        _storage(ctx).move(src, dst)
    except (OSError, StorageError) as exc:
        _fail(exc)


@app.command("rm")
def rm(ctx: typer.Context, path: str = typer.Argument(...)) -> None:
    """エントリを 1 件削除する。"""

    try:
        _storage(ctx).delete(path)
    except (OSError, StorageError) as exc:
        _fail(exc)


def _storage(ctx: typer.Context) -> StorageBackend:
    return cast(StorageBackend, ctx.obj)


def _echo_object(obj: StorageObject) -> None:
    typer.echo(json.dumps(obj.to_dict(), ensure_ascii=False))


def _fail(exc: Exception) -> NoReturn:
    typer.secho(f"error: {exc}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)
