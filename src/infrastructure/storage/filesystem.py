"""
ローカルファイルシステムを StorageBackend として扱う実装。

すべての論理パスはワークディレクトリを基準に解決される。
OS 由来のエラー (FileNotFoundError, PermissionError など) は加工せずに送出する。
"""

from __future__ import annotations

import logging
import os
import stat as stat_module
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Iterator

from application.observability import observe_operation, record_bytes
from domain import (
    STD_STREAM_PATH,
    ListDirOptions,
    ObjectType,
    ReadOptions,
    StdStream,
    StorageMeta,
    StorageObject,
    WriteOptions,
    parse_logical_path,
)

from .content_type import detect_content_type
from .iowrap import COPY_BUFFER_SIZE, CallbackReader, LimitedReader, ReaderWrapper, copy_buffer, copy_n
from .path_resolver import WorkDirPathResolver, to_logical_name, to_slash
from .storage_client import StorageBackend

LOGGER = logging.getLogger("localfs_storage.storage.filesystem")

_STREAM_MODE_CHECKS = (
    stat_module.S_ISFIFO,
    stat_module.S_ISSOCK,
    stat_module.S_ISCHR,
    stat_module.S_ISBLK,
)


@contextmanager
def _track(operation: str, **fields: object) -> Iterator[None]:
    LOGGER.debug("%s %s", operation, fields)
    with observe_operation(operation):
        try:
            yield None
        except (OSError, EOFError) as exc:
            LOGGER.debug("%s failed: %s", operation, exc)
            raise


class LocalFileSystemStorage(StorageBackend):
    """
    ローカルディスクを他のストレージバックエンドと同じ操作で扱うアダプタ。

    コンストラクタはファイルシステムにアクセスしない。ワークディレクトリが
    存在しなくても生成でき、"-" に対する stat は常に成功する。
    """

    def __init__(self, work_dir: str | os.PathLike[str] | None = None) -> None:
        if work_dir is None:
            self._resolver = WorkDirPathResolver()
        else:
            self._resolver = WorkDirPathResolver(Path(work_dir))

    def __repr__(self) -> str:
        return f"LocalFileSystemStorage(work_dir={str(self.work_dir)!r})"

    @property
    def work_dir(self) -> Path:
        return self._resolver.work_dir

    @property
    def path_resolver(self) -> WorkDirPathResolver:
        return self._resolver

    def delete(self, path: str) -> None:
        """
        エントリを 1 件削除する。ディレクトリは空の場合のみ削除できる。
        """

        with _track("delete", path=path):
            absolute = self._resolver.resolve(path)
            if absolute.is_dir() and not absolute.is_symlink():
                absolute.rmdir()
            else:
                absolute.unlink()

    def list_dir(self, dir: str, options: ListDirOptions | None = None) -> None:
        """
        ディレクトリ直下のエントリを発見順にコールバックへ渡す。

        Raises:
            OSError: ディレクトリの列挙やリンク先の解決に失敗した場合。
                失敗時点で列挙全体を中断する。
        """

        options = options or ListDirOptions()
        with _track("list_dir", dir=dir, follow_links=options.follow_links):
            for entry in self.iter_dir(dir, options):
                if entry.is_dir:
                    if options.on_dir is not None:
                        options.on_dir(entry)
                elif options.on_file is not None:
                    options.on_file(entry)

    def iter_dir(self, dir: str, options: ListDirOptions | None = None) -> Iterator[StorageObject]:
        """
        list_dir と同じ規則でエントリを遅延生成する。コールバックは呼ばない。
        """

        options = options or ListDirOptions()
        absolute_dir = self._resolver.resolve(dir)
        logical_dir = to_slash(dir)

        with os.scandir(absolute_dir) as entries:
            for entry in entries:
                if entry.is_symlink() and not options.follow_links:
                    continue
                target = _stat_entry(entry)
                yield _build_listed_object(entry, target, absolute_dir, logical_dir)

    def metadata(self) -> StorageMeta:
        return StorageMeta(work_dir=str(self.work_dir))

    def read(self, path: str, options: ReadOptions | None = None) -> BinaryIO:
        """
        読み込み用ストリームを返す。呼び出し側が close する責務を持つ。

        "-" の場合は標準入力を返す (close しても標準入力自体は閉じない)。
        """

        options = options or ReadOptions()
        with _track("read", path=path, offset=options.offset, size=options.size):
            target = parse_logical_path(path)
            if isinstance(target, StdStream):
                stdin = sys.stdin.buffer
                if options.size is not None:
                    return LimitedReader(stdin, options.size, close_inner=False)  # type: ignore[return-value]
                return ReaderWrapper(stdin, close_inner=False)  # type: ignore[return-value]

            absolute = self._resolver.resolve(target.value)
            handle = absolute.open("rb")
            if options.offset is not None:
                try:
                    handle.seek(options.offset, os.SEEK_SET)
                except OSError:
                    handle.close()
                    raise

            stream: BinaryIO = handle
            if options.size is not None:
                stream = LimitedReader(stream, options.size)  # type: ignore[assignment]
            if options.read_callback is not None:
                stream = CallbackReader(stream, options.read_callback)  # type: ignore[assignment]
            return stream

    def stat(self, path: str) -> StorageObject:
        """
        エントリのメタデータを返す。

        未知のファイル種別はエラーにせず ObjectType.INVALID として返す。
        """

        with _track("stat", path=path):
            target = parse_logical_path(path)
            if isinstance(target, StdStream):
                return StorageObject(
                    id=STD_STREAM_PATH,
                    name=STD_STREAM_PATH,
                    type=ObjectType.STREAM,
                    size=0,
                )

            absolute = self._resolver.resolve(target.value)
            info = absolute.stat()
            object_type = _classify(info.st_mode)
            content_type = None
            if object_type is ObjectType.FILE:
                content_type = detect_content_type(target.value)

            return StorageObject(
                id=str(absolute),
                name=to_slash(target.value),
                type=object_type,
                size=info.st_size,
                updated_at=_modified_at(info),
                content_type=content_type,
            )

    def write(self, path: str, source: BinaryIO, options: WriteOptions | None = None) -> int:
        """
        source の内容を書き込み、書き込んだバイト数を返す。

        size 指定時はちょうど size バイトをコピーし、入力が足りなければ
        UnexpectedEOFError を送出する。途中まで書き込んだ内容は巻き戻さない。
        """

        options = options or WriteOptions()
        with _track("write", path=path, size=options.size):
            target = parse_logical_path(path)
            reader = source
            if options.read_callback is not None:
                reader = CallbackReader(source, options.read_callback, close_inner=False)  # type: ignore[assignment]

            if isinstance(target, StdStream):
                stdout = sys.stdout.buffer
                written = _copy(stdout, reader, options.size)
                stdout.flush()
            else:
                absolute = self._resolver.ensure_parent_dir(target.value)
                with absolute.open("wb") as handle:
                    written = _copy(handle, reader, options.size)

        record_bytes("write", written)
        return written

    def copy(self, src: str, dst: str) -> int:
        """
        src の内容を dst にコピーし、コピーしたバイト数を返す。src は変更しない。
        """

        with _track("copy", src=src, dst=dst):
            source_path = self._resolver.resolve(src)
            destination_path = self._resolver.ensure_parent_dir(dst)
            with source_path.open("rb") as source, destination_path.open("wb") as destination:
                written = copy_buffer(destination, source, COPY_BUFFER_SIZE)

        record_bytes("copy", written)
        return written

    def move(self, src: str, dst: str) -> None:
        """
        src を dst へリネームする。既存の dst は置き換えられる。

        ファイルシステムをまたぐ場合は OSError (EXDEV) がそのまま送出される。
        """

        with _track("move", src=src, dst=dst):
            source_path = self._resolver.resolve(src)
            destination_path = self._resolver.ensure_parent_dir(dst)
            source_path.replace(destination_path)


def _copy(dst: BinaryIO, src: BinaryIO, size: int | None) -> int:
    if size is not None:
        return copy_n(dst, src, size)
    return copy_buffer(dst, src, COPY_BUFFER_SIZE)


def _stat_entry(entry: os.DirEntry[str]) -> os.stat_result:
    # リンク切れや循環リンクは OSError として送出される
    return entry.stat(follow_symlinks=entry.is_symlink())


def _build_listed_object(
    entry: os.DirEntry[str],
    target: os.stat_result,
    absolute_dir: Path,
    logical_dir: str,
) -> StorageObject:
    object_id = str(absolute_dir / entry.name)
    name = to_logical_name(logical_dir, entry.name)

    if stat_module.S_ISDIR(target.st_mode):
        return StorageObject(
            id=object_id,
            name=name,
            type=ObjectType.DIR,
            size=target.st_size,
            updated_at=_modified_at(target),
        )

    return StorageObject(
        id=object_id,
        name=name,
        type=ObjectType.FILE,
        size=target.st_size,
        updated_at=_modified_at(target),
        content_type=detect_content_type(entry.name),
    )


def _classify(mode: int) -> ObjectType:
    if stat_module.S_ISDIR(mode):
        return ObjectType.DIR
    if stat_module.S_ISREG(mode):
        return ObjectType.FILE
    if any(check(mode) for check in _STREAM_MODE_CHECKS):
        return ObjectType.STREAM
    return ObjectType.INVALID


def _modified_at(info: os.stat_result) -> datetime:
    return datetime.fromtimestamp(info.st_mtime, tz=timezone.utc)
