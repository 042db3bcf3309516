"""
アプリケーション層パッケージ初期化。
"""

from .observability import (
    MetricsRecorderProtocol,
    observe_operation,
    record_bytes,
    reset_observability,
    use_metrics_recorder,
)

__all__ = [
    "MetricsRecorderProtocol",
    "observe_operation",
    "record_bytes",
    "reset_observability",
    "use_metrics_recorder",
]
