"""
ストレージバックエンドの抽象インターフェース。
"""

from __future__ import annotations

from typing import BinaryIO, Iterator, Protocol

from domain import ListDirOptions, ReadOptions, StorageMeta, StorageObject, WriteOptions


class StorageError(RuntimeError):
    """ストレージ操作に関する例外。OS 由来のエラーはこの型に包まずそのまま送出する。"""


class UnexpectedEOFError(StorageError, EOFError):
    """サイズ指定付きコピーで入力が指定サイズに満たなかった。"""

    def __init__(self, expected: int, copied: int) -> None:
        super().__init__(f"入力が途中で終了しました: expected={expected} copied={copied}")
        self.expected = expected
        self.copied = copied


class StorageBackend(Protocol):
    """
    マルチクラウドストレージ抽象で扱う基本操作を定義。

    パスは `/` 区切りの論理パス。"-" は標準入出力を表す。
    """

    def delete(self, path: str) -> None:
        ...

    def list_dir(self, dir: str, options: ListDirOptions | None = None) -> None:
        ...

    def iter_dir(self, dir: str, options: ListDirOptions | None = None) -> Iterator[StorageObject]:
        ...

    def metadata(self) -> StorageMeta:
        ...

    def read(self, path: str, options: ReadOptions | None = None) -> BinaryIO:
        ...

    def stat(self, path: str) -> StorageObject:
        ...

    def write(self, path: str, source: BinaryIO, options: WriteOptions | None = None) -> int:
        ...

    def copy(self, src: str, dst: str) -> int:
        ...

    def move(self, src: str, dst: str) -> None:
        ...
