"""
ドメイン層のパッケージ初期化。
"""

from .models import ObjectType, StorageMeta, StorageObject
from .value_objects import (
    STD_STREAM_PATH,
    ListDirOptions,
    LogicalPath,
    NamedPath,
    ReadOptions,
    StdStream,
    WriteOptions,
    parse_logical_path,
)

__all__ = [
    "ObjectType",
    "StorageMeta",
    "StorageObject",
    "STD_STREAM_PATH",
    "ListDirOptions",
    "LogicalPath",
    "NamedPath",
    "ReadOptions",
    "StdStream",
    "WriteOptions",
    "parse_logical_path",
]
