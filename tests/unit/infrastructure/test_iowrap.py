from __future__ import annotations

from io import BytesIO

import pytest

from infrastructure.storage import (
    CallbackReader,
    LimitedReader,
    ReaderWrapper,
    UnexpectedEOFError,
    copy_buffer,
    copy_n,
)


class _TrackingStream(BytesIO):
    def __init__(self, data: bytes, chunk: int) -> None:
        super().__init__(data)
        self._chunk = chunk

    def read(self, size: int | None = -1) -> bytes:
        if size is None or size < 0 or size > self._chunk:
            size = self._chunk
        return super().read(size)


def test_limited_reader_stops_at_limit() -> None:
    reader = LimitedReader(BytesIO(b"0123456789"), 4)

    assert reader.read() == b"0123"
    assert reader.read(10) == b""
    assert reader.remaining == 0


def test_limited_reader_ends_with_inner_stream() -> None:
    reader = LimitedReader(BytesIO(b"abc"), 10)

    assert reader.read() == b"abc"
    assert reader.remaining == 7


def test_limited_reader_rejects_negative_limit() -> None:
    with pytest.raises(ValueError):
        LimitedReader(BytesIO(b""), -1)


def test_callback_reader_reports_each_read() -> None:
    seen: list[int] = []
    reader = CallbackReader(_TrackingStream(b"abcdefgh", chunk=3), seen.append)

    assert reader.read() == b"abcdefgh"
    assert sum(seen) == 8
    assert [count for count in seen if count] == [3, 3, 2]


def test_close_propagates_unless_disabled() -> None:
    inner = BytesIO(b"data")
    with LimitedReader(inner, 2) as reader:
        reader.read()
    assert inner.closed

    shared = BytesIO(b"data")
    ReaderWrapper(shared, close_inner=False).close()
    assert not shared.closed


def test_copy_buffer_copies_everything() -> None:
    destination = BytesIO()

    copied = copy_buffer(destination, BytesIO(b"x" * 10), buffer_size=3)

    assert copied == 10
    assert destination.getvalue() == b"x" * 10


def test_copy_n_copies_exact_size() -> None:
    destination = BytesIO()

    copied = copy_n(destination, BytesIO(b"abcdef"), 4, buffer_size=3)

    assert copied == 4
    assert destination.getvalue() == b"abcd"


def test_copy_n_raises_on_short_source() -> None:
    destination = BytesIO()

    with pytest.raises(UnexpectedEOFError) as excinfo:
        copy_n(destination, BytesIO(b"ab"), 5)

    assert excinfo.value.expected == 5
    assert excinfo.value.copied == 2
    assert isinstance(excinfo.value, EOFError)
    assert destination.getvalue() == b"ab"
