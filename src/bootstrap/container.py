"""
アプリケーション全体の初期化を担う DI コンテナ。

設定値は YAML から読み込まれ、コンテナは設定ロード、ロギング初期化、
メトリクス初期化、ストレージ生成を統括して初期化済みのコンテキストを返す。
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Mapping, Protocol

if TYPE_CHECKING:
    from infrastructure.storage import StorageBackend


class ConfigLoader(Protocol):
    """設定ファイル群を読み込み、検証済みの構成を返すインターフェース。"""

    def load(self) -> "ConfigBundle":
        raise NotImplementedError


class LoggingConfigurator(Protocol):
    """ロギング設定を適用するインターフェース。"""

    def configure(self, config: Mapping[str, Any]) -> None:
        raise NotImplementedError


class MetricsConfigurator(Protocol):
    """メトリクスの初期化を行うインターフェース。"""

    def configure(self, config: Mapping[str, Any]) -> None:
        raise NotImplementedError


class BootstrapError(RuntimeError):
    """ブートストラップ処理でのエラーを表す基底例外。"""


class MissingConfigurationError(BootstrapError):
    """必須設定が欠落している場合の例外。"""


class InvalidConfigurationError(BootstrapError):
    """設定値が期待する形式ではない場合の例外。"""


@dataclass(frozen=True)
class ConfigBundle:
    """設定 YAML から構築された辞書ラッパー。"""

    root: Mapping[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """設定の浅いコピーを返す。"""

        return dict(self.root)

    def require_section(self, section: str) -> Mapping[str, Any]:
        """
        指定セクションの存在と型を検証して返す。

        Raises:
            MissingConfigurationError: セクションが存在しない場合。
            InvalidConfigurationError: セクションがマッピングではない場合。
        """

        if section not in self.root:
            raise MissingConfigurationError(f"設定セクション '{section}' が存在しません。")

        value = self.root[section]
        if not isinstance(value, Mapping):
            raise InvalidConfigurationError(
                f"設定セクション '{section}' は Mapping である必要があります。"
            )
        return value

    def require_value(self, section: str, key: str) -> Any:
        """
        指定セクション内のキーの存在と値を検証して返す。

        Raises:
            MissingConfigurationError: キーが存在しない場合。
        """

        mapping = self.require_section(section)
        if key not in mapping:
            raise MissingConfigurationError(f"設定キー '{section}.{key}' が存在しません。")
        return mapping[key]


@dataclass(frozen=True)
class BootstrapContext:
    """
    ブートストラップ処理後に利用側へ渡すコンテキスト。
    """

    config: ConfigBundle
    storage: "StorageBackend"


@dataclass
class BootstrapContainer:
    """
    アプリケーション全体の初期化を司るコンテナ。

    Attributes:
        project_root: プロジェクトのルートパス。
        config_loader_factory: ConfigLoader を生成するファクトリ。
        logging_configurator: ロギング設定適用オブジェクト。
        metrics_configurator: メトリクス設定適用オブジェクト。
        storage_factory: storage セクションからバックエンドを生成するファクトリ。
    """

    project_root: Path
    config_loader_factory: Callable[[Path], ConfigLoader]
    logging_configurator: LoggingConfigurator
    metrics_configurator: MetricsConfigurator
    storage_factory: Callable[[Mapping[str, Any]], "StorageBackend"]

    def initialize(self) -> BootstrapContext:
        """
        設定ロード・ロギング初期化・メトリクス初期化・ストレージ生成を順に実行する。

        Raises:
            BootstrapError: 初期化過程での検証エラー。
        """

        config_loader = self.config_loader_factory(self.project_root)
        config_bundle = config_loader.load()

        logging_config = config_bundle.require_section("logging")
        metrics_config = config_bundle.require_section("metrics")
        storage_config = config_bundle.require_section("storage")

        self.logging_configurator.configure(logging_config)
        self.metrics_configurator.configure(metrics_config)

        return BootstrapContext(config=config_bundle, storage=self.storage_factory(storage_config))
