"""
ファイル名の拡張子から MIME タイプを推定する。
"""

from __future__ import annotations

import mimetypes
import posixpath

from .path_resolver import to_slash

_DETECTOR = mimetypes.MimeTypes()

# mimetypes は圧縮拡張子を encoding として返すため、最後の拡張子の型に読み替える
_ENCODING_CONTENT_TYPES = {
    "gzip": "application/gzip",
    "bzip2": "application/x-bzip2",
    "xz": "application/x-xz",
    "compress": "application/x-compress",
    "br": "application/x-brotli",
}


def detect_content_type(path: str) -> str | None:
    """
    最後の拡張子に対応する MIME タイプを返す。判定できない場合は None。

    ``archive.tar.gz`` は ``application/gzip`` になる。
    """

    name = posixpath.basename(to_slash(path))
    if not name:
        return None
    content_type, encoding = _DETECTOR.guess_type(name, strict=False)
    if encoding is not None:
        return _ENCODING_CONTENT_TYPES.get(encoding)
    return content_type
