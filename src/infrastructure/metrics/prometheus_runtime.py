"""
prometheus-client の CollectorRegistry を MetricsRegistry として扱う実装。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping, Sequence, TypeVar

from prometheus_client import (
    CollectorRegistry,
    Counter as PrometheusCounter,
    Histogram as PrometheusHistogram,
    start_http_server,
)
from prometheus_client.metrics import MetricWrapperBase

from .prometheus_exporter import Counter, Histogram, MetricsRegistry

_MetricT = TypeVar("_MetricT", bound=MetricWrapperBase)


def _child(metric: MetricWrapperBase, labels: Mapping[str, str] | None) -> MetricWrapperBase:
    if labels:
        return metric.labels(**labels)
    return metric


class _CounterAdapter(Counter):
    def __init__(self, metric: PrometheusCounter) -> None:
        self._metric = metric

    def inc(self, value: float = 1.0, labels: Mapping[str, str] | None = None) -> None:
        _child(self._metric, labels).inc(value)  # type: ignore[attr-defined]


class _HistogramAdapter(Histogram):
    def __init__(self, metric: PrometheusHistogram) -> None:
        self._metric = metric

    def observe(self, value: float, labels: Mapping[str, str] | None = None) -> None:
        _child(self._metric, labels).observe(value)  # type: ignore[attr-defined]


@dataclass
class PrometheusMetricsRegistry(MetricsRegistry):
    """
    メトリクスを名前単位で一度だけ CollectorRegistry に登録し、以降は再利用する。

    同じ名前を異なるラベル構成で要求した場合は ValueError を送出する。
    ``histogram_buckets`` はヒストグラム名ごとのバケット境界で、未指定の名前は
    prometheus-client の既定バケットを使う。
    """

    registry: CollectorRegistry = field(default_factory=CollectorRegistry)
    histogram_buckets: Mapping[str, Sequence[float]] = field(default_factory=dict)

    _metrics: dict[str, tuple[tuple[str, ...], MetricWrapperBase]] = field(
        default_factory=dict, init=False, repr=False
    )

    def counter(self, name: str, documentation: str, labels: tuple[str, ...] | None = None) -> Counter:
        metric = self._register(
            name,
            labels,
            lambda label_names: PrometheusCounter(
                name, documentation, labelnames=label_names, registry=self.registry
            ),
        )
        return _CounterAdapter(metric)

    def histogram(self, name: str, documentation: str, labels: tuple[str, ...] | None = None) -> Histogram:
        buckets = self.buckets_for(name)
        metric = self._register(
            name,
            labels,
            lambda label_names: PrometheusHistogram(
                name,
                documentation,
                labelnames=label_names,
                buckets=buckets,
                registry=self.registry,
            ),
        )
        return _HistogramAdapter(metric)

    def buckets_for(self, name: str) -> tuple[float, ...]:
        boundaries = self.histogram_buckets.get(name)
        if not boundaries:
            return tuple(PrometheusHistogram.DEFAULT_BUCKETS)
        return tuple(float(boundary) for boundary in boundaries)

    def _register(
        self,
        name: str,
        labels: Sequence[str] | None,
        factory: Callable[[tuple[str, ...]], _MetricT],
    ) -> _MetricT:
        label_names = tuple(sorted(labels or ()))
        cached = self._metrics.get(name)
        if cached is not None:
            registered_labels, metric = cached
            if registered_labels != label_names:
                raise ValueError(
                    f"メトリクス '{name}' はラベル {registered_labels} で登録済みです (要求: {label_names})。"
                )
            return metric  # type: ignore[return-value]
        metric = factory(label_names)
        self._metrics[name] = (label_names, metric)
        return metric


def start_metrics_http_server(
    registry: CollectorRegistry,
    *,
    host: str,
    port: int,
) -> object | None:
    """
    `/metrics` を公開する HTTP サーバを起動する。port が 0 以下なら何もしない。
    """

    if port <= 0:
        return None
    return start_http_server(port, addr=host, registry=registry)
