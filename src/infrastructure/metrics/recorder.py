"""
ストレージ操作のメトリクス記録ユーティリティ。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .prometheus_exporter import Counter, Histogram, MetricsRegistry


@dataclass
class _MetricHandles:
    operations_total: Counter
    operation_duration_seconds: Histogram
    bytes_total: Counter


class StorageMetricsRecorder:
    """
    グローバルなメトリクス記録を担当するヘルパ。
    MetricsRegistry が未設定の場合はすべての更新を無視する。
    """

    _registry: MetricsRegistry | None = None
    _handles: _MetricHandles | None = None
    _default_labels: Mapping[str, str] = {}

    @classmethod
    def configure(
        cls,
        registry: MetricsRegistry,
        *,
        default_labels: Mapping[str, str] | None = None,
    ) -> None:
        cls._registry = registry
        cls._default_labels = default_labels or {}
        base_label_names = tuple(cls._default_labels.keys())

        def _label_names(*names: str) -> tuple[str, ...]:
            return base_label_names + names

        cls._handles = _MetricHandles(
            operations_total=registry.counter(
                "storage_operations",
                "Number of storage operations by outcome",
                labels=_label_names("operation", "status"),
            ),
            operation_duration_seconds=registry.histogram(
                "storage_operation_duration_seconds",
                "Duration of storage operations in seconds",
                labels=_label_names("operation"),
            ),
            bytes_total=registry.counter(
                "storage_bytes",
                "Number of bytes transferred by write and copy",
                labels=_label_names("operation"),
            ),
        )

    @classmethod
    def _merge_labels(cls, extra: Mapping[str, str] | None) -> Mapping[str, str]:
        if not extra:
            return cls._default_labels
        merged = dict(cls._default_labels)
        merged.update(extra)
        return merged

    @classmethod
    def observe_operation(cls, operation: str, status: str, duration_seconds: float) -> None:
        if not cls._handles:
            return
        cls._handles.operations_total.inc(
            1.0, labels=cls._merge_labels({"operation": operation, "status": status})
        )
        cls._handles.operation_duration_seconds.observe(
            duration_seconds, labels=cls._merge_labels({"operation": operation})
        )

    @classmethod
    def increment_bytes(cls, operation: str, count: int) -> None:
        if not cls._handles or count <= 0:
            return
        labels = cls._merge_labels({"operation": operation})
        cls._handles.bytes_total.inc(float(count), labels=labels)

    @classmethod
    def reset(cls) -> None:
        cls._registry = None
        cls._handles = None
        cls._default_labels = {}
