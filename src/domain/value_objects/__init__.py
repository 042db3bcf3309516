"""
ドメイン値オブジェクトの公開API。
"""

from .logical_path import STD_STREAM_PATH, LogicalPath, NamedPath, StdStream, parse_logical_path
from .options import ListDirOptions, ObjectCallback, ReadCallback, ReadOptions, WriteOptions

__all__ = [
    "STD_STREAM_PATH",
    "LogicalPath",
    "NamedPath",
    "StdStream",
    "parse_logical_path",
    "ListDirOptions",
    "ObjectCallback",
    "ReadCallback",
    "ReadOptions",
    "WriteOptions",
]
