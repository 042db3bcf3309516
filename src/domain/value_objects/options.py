"""
ストレージ操作毎に渡すオプション値オブジェクト。

値が None のフィールドは「未指定」を意味する。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from ..models.storage_object import StorageObject

ReadCallback = Callable[[int], None]
ObjectCallback = Callable[["StorageObject"], None]


def _validate_non_negative(value: int | None, name: str) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} は int である必要があります。")
    if value < 0:
        raise ValueError(f"{name} は 0 以上である必要があります。")


@dataclass(frozen=True)
class ReadOptions:
    """
    read 操作のオプション。

    Attributes:
        offset: 読み込み開始位置 (先頭からのバイト数)。
        size: 読み込む最大バイト数。
        read_callback: 下位ストリームの read 毎に読み込んだバイト数で呼ばれる。
    """

    offset: int | None = None
    size: int | None = None
    read_callback: ReadCallback | None = None

    def __post_init__(self) -> None:
        _validate_non_negative(self.offset, "offset")
        _validate_non_negative(self.size, "size")


@dataclass(frozen=True)
class WriteOptions:
    """
    write 操作のオプション。

    Attributes:
        size: 書き込むバイト数。指定時は入力がこれより短いとエラーになる。
        read_callback: 入力ストリームの read 毎に読み込んだバイト数で呼ばれる。
    """

    size: int | None = None
    read_callback: ReadCallback | None = None

    def __post_init__(self) -> None:
        _validate_non_negative(self.size, "size")


@dataclass(frozen=True)
class ListDirOptions:
    """
    list_dir 操作のオプション。

    Attributes:
        follow_links: シンボリックリンクを辿るか。False の場合リンクはスキップされる。
        on_dir: ディレクトリ毎に呼ばれるコールバック。
        on_file: ファイル毎に呼ばれるコールバック。
    """

    follow_links: bool = False
    on_dir: ObjectCallback | None = None
    on_file: ObjectCallback | None = None
