"""
論理パスの表現。

リテラル文字列 "-" は常に標準入出力を表す。"-" という名前の実ファイルは
このアダプタからは参照できない。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

STD_STREAM_PATH = "-"


@dataclass(frozen=True)
class StdStream:
    """標準入力 (read) / 標準出力 (write) を指すセンチネル。"""

    def __str__(self) -> str:
        return STD_STREAM_PATH


@dataclass(frozen=True)
class NamedPath:
    """ワークディレクトリ配下の名前付きパス。"""

    value: str

    def __str__(self) -> str:
        return self.value


LogicalPath = Union[NamedPath, StdStream]


def parse_logical_path(path: str) -> LogicalPath:
    if not isinstance(path, str):
        raise TypeError("path は str である必要があります。")
    if path == STD_STREAM_PATH:
        return StdStream()
    return NamedPath(path)
