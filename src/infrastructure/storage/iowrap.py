"""
ストリームをラップするユーティリティ。

サイズ制限付きリーダー、read 毎にコールバックを呼ぶリーダー、
固定長バッファによるコピー関数を提供する。
"""

from __future__ import annotations

import io
import shutil
from typing import BinaryIO, Callable

from .storage_client import UnexpectedEOFError

COPY_BUFFER_SIZE = 1024 * 1024


class ReaderWrapper(io.RawIOBase):
    """
    `read(n)` を持つ任意のストリームを RawIOBase として包む基底クラス。

    close_inner が True の場合、close() は内側のストリームも閉じる。
    """

    _close_inner = False

    def __init__(self, inner: BinaryIO, *, close_inner: bool = True) -> None:
        super().__init__()
        self._inner = inner
        self._close_inner = close_inner

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[no-untyped-def, override]
        view = memoryview(buffer).cast("B")
        data = self._read_inner(len(view))
        size = len(data)
        view[:size] = data
        return size

    def _read_inner(self, size: int) -> bytes:
        return self._inner.read(size) or b""

    def close(self) -> None:
        if self.closed:
            return
        try:
            if self._close_inner:
                self._inner.close()
        finally:
            super().close()


class LimitedReader(ReaderWrapper):
    """
    指定バイト数を読み終えた時点で EOF を返すリーダー。

    内側のストリームが先に終了した場合はそこで EOF になる。
    """

    def __init__(self, inner: BinaryIO, limit: int, *, close_inner: bool = True) -> None:
        if limit < 0:
            raise ValueError("limit は 0 以上である必要があります。")
        super().__init__(inner, close_inner=close_inner)
        self._remaining = limit

    @property
    def remaining(self) -> int:
        return self._remaining

    def _read_inner(self, size: int) -> bytes:
        if self._remaining <= 0:
            return b""
        data = super()._read_inner(min(size, self._remaining))
        self._remaining -= len(data)
        return data


class CallbackReader(ReaderWrapper):
    """
    下位ストリームの read 毎に読み込んだバイト数でコールバックを呼ぶリーダー。

    データ自体には手を加えない。
    """

    def __init__(
        self,
        inner: BinaryIO,
        callback: Callable[[int], None],
        *,
        close_inner: bool = True,
    ) -> None:
        super().__init__(inner, close_inner=close_inner)
        self._callback = callback

    def _read_inner(self, size: int) -> bytes:
        data = super()._read_inner(size)
        self._callback(len(data))
        return data


class _CountingWriter:
    def __init__(self, inner: BinaryIO) -> None:
        self._inner = inner
        self.written = 0

    def write(self, data: bytes) -> int:
        self._inner.write(data)
        self.written += len(data)
        return len(data)


def copy_buffer(dst: BinaryIO, src: BinaryIO, buffer_size: int = COPY_BUFFER_SIZE) -> int:
    """
    入力が尽きるまで固定長バッファでコピーし、コピーしたバイト数を返す。
    """

    if buffer_size <= 0:
        raise ValueError("buffer_size は正の値である必要があります。")
    counter = _CountingWriter(dst)
    shutil.copyfileobj(src, counter, buffer_size)
    return counter.written


def copy_n(dst: BinaryIO, src: BinaryIO, size: int, buffer_size: int = COPY_BUFFER_SIZE) -> int:
    """
    ちょうど `size` バイトをコピーする。

    Raises:
        UnexpectedEOFError: 入力が `size` バイトに満たなかった場合。
    """

    if size < 0:
        raise ValueError("size は 0 以上である必要があります。")
    limited = LimitedReader(src, size, close_inner=False)
    copied = copy_buffer(dst, limited, buffer_size)  # type: ignore[arg-type]
    if copied < size:
        raise UnexpectedEOFError(expected=size, copied=copied)
    return copied
