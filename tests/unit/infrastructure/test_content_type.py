from __future__ import annotations

import pytest

from infrastructure.storage import detect_content_type


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("notes.txt", "text/plain"),
        ("dir/data.json", "application/json"),
        ("archive.tar.gz", "application/gzip"),
        ("dump.sql.bz2", "application/x-bzip2"),
        ("plain.gz", "application/gzip"),
        ("blob.unknownext", None),
        ("no-extension", None),
        ("dir/", None),
    ],
)
def test_detect_content_type_uses_last_extension(path: str, expected: str | None) -> None:
    assert detect_content_type(path) == expected
