"""
インフラ層のパッケージ初期化。
"""

from .metrics import PrometheusMetricsRegistry, StorageMetricsRecorder
from .storage import (
    LocalFileSystemStorage,
    StorageBackend,
    StorageError,
    UnexpectedEOFError,
    WorkDirPathResolver,
)

__all__ = [
    "LocalFileSystemStorage",
    "PrometheusMetricsRegistry",
    "StorageBackend",
    "StorageError",
    "StorageMetricsRecorder",
    "UnexpectedEOFError",
    "WorkDirPathResolver",
]
