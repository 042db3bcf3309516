"""
メトリクス初期化ロジック。
"""

from __future__ import annotations

from typing import Any, Mapping

from prometheus_client import CollectorRegistry
from pydantic import ValidationError

from application.observability import reset_observability, use_metrics_recorder
from infrastructure.metrics import (
    PrometheusMetricsRegistry,
    StorageMetricsRecorder,
    start_metrics_http_server,
)

from .config_loader import MetricsOptionsModel
from .container import InvalidConfigurationError, MetricsConfigurator


class MetricsConfiguratorRegistry(MetricsConfigurator):
    """
    provider 名に応じて委譲するディスパッチャ。
    """

    def __init__(self, delegates: Mapping[str, MetricsConfigurator]) -> None:
        if not delegates:
            raise ValueError("メトリクス設定の委譲先が定義されていません。")
        self._delegates = dict(delegates)

    def configure(self, config: Mapping[str, Any]) -> None:
        provider = _require_string(config, "provider")
        delegate = self._delegates.get(provider)
        if delegate is None:
            raise InvalidConfigurationError(
                f"metrics provider '{provider}' に対応する初期化ロジックが見つかりません。"
            )
        delegate.configure(config)


class NoopMetricsConfigurator(MetricsConfigurator):
    """
    provider == noop の場合に適用する実装。ストレージ操作の記録をすべて無効にする。
    """

    EXPECTED_PROVIDER = "noop"

    def configure(self, config: Mapping[str, Any]) -> None:
        provider = _require_string(config, "provider")
        if provider != self.EXPECTED_PROVIDER:
            raise InvalidConfigurationError(
                f"provider '{provider}' は NoopMetricsConfigurator では扱えません。"
            )
        StorageMetricsRecorder.reset()
        reset_observability()


class PrometheusMetricsConfigurator(MetricsConfigurator):
    """
    prometheus-client のレジストリに StorageMetricsRecorder を接続する。

    メトリクスは最初の configure で登録し、以降の configure では同じ
    PrometheusMetricsRegistry を再利用する。``histogram_buckets`` は最初の
    configure の値が使われる。``options.port`` が正の場合のみ ``/metrics`` を
    一度だけ公開する。
    """

    EXPECTED_PROVIDER = "prometheus"

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._collector = registry
        self._metrics_registry: PrometheusMetricsRegistry | None = None
        self._server: object | None = None

    @property
    def registry(self) -> CollectorRegistry | None:
        if self._metrics_registry is not None:
            return self._metrics_registry.registry
        return self._collector

    def configure(self, config: Mapping[str, Any]) -> None:
        provider = _require_string(config, "provider")
        if provider != self.EXPECTED_PROVIDER:
            raise InvalidConfigurationError(
                f"provider '{provider}' は PrometheusMetricsConfigurator では扱えません。"
            )

        try:
            options = MetricsOptionsModel.model_validate(config.get("options") or {})
        except ValidationError as exc:
            raise InvalidConfigurationError(f"metrics.options の検証に失敗しました: {exc}") from exc

        if self._metrics_registry is None:
            collector = self._collector if self._collector is not None else CollectorRegistry()
            self._metrics_registry = PrometheusMetricsRegistry(
                registry=collector,
                histogram_buckets=options.histogram_buckets,
            )

        try:
            StorageMetricsRecorder.configure(self._metrics_registry, default_labels=options.default_labels)
        except ValueError as exc:
            raise InvalidConfigurationError(f"メトリクスの登録に失敗しました: {exc}") from exc
        use_metrics_recorder(StorageMetricsRecorder)  # type: ignore[arg-type]

        if self._server is None:
            self._server = start_metrics_http_server(
                self._metrics_registry.registry, host=options.host, port=options.port
            )


def default_metrics_configurator() -> MetricsConfiguratorRegistry:
    return MetricsConfiguratorRegistry(
        {
            NoopMetricsConfigurator.EXPECTED_PROVIDER: NoopMetricsConfigurator(),
            PrometheusMetricsConfigurator.EXPECTED_PROVIDER: PrometheusMetricsConfigurator(),
        }
    )


def _require_string(config: Mapping[str, Any], key: str) -> str:
    if key not in config:
        raise InvalidConfigurationError(f"metrics 設定に '{key}' が存在しません。")
    value = config[key]
    if not isinstance(value, str) or not value:
        raise InvalidConfigurationError(f"metrics 設定の '{key}' は非空の str である必要があります。")
    return value
