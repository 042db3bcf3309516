"""
メトリクス関連の公開API。
"""

from .prometheus_exporter import Counter, Histogram, MetricsRegistry
from .prometheus_runtime import PrometheusMetricsRegistry, start_metrics_http_server
from .recorder import StorageMetricsRecorder

__all__ = [
    "Counter",
    "Histogram",
    "MetricsRegistry",
    "PrometheusMetricsRegistry",
    "StorageMetricsRecorder",
    "start_metrics_http_server",
]
