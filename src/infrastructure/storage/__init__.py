"""
ストレージアクセス層の公開API。
"""

from .content_type import detect_content_type
from .filesystem import LocalFileSystemStorage
from .iowrap import COPY_BUFFER_SIZE, CallbackReader, LimitedReader, ReaderWrapper, copy_buffer, copy_n
from .path_resolver import WorkDirPathResolver, to_logical_name, to_slash
from .storage_client import StorageBackend, StorageError, UnexpectedEOFError

__all__ = [
    "LocalFileSystemStorage",
    "StorageBackend",
    "StorageError",
    "UnexpectedEOFError",
    "WorkDirPathResolver",
    "to_logical_name",
    "to_slash",
    "detect_content_type",
    "COPY_BUFFER_SIZE",
    "CallbackReader",
    "LimitedReader",
    "ReaderWrapper",
    "copy_buffer",
    "copy_n",
]
