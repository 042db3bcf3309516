"""
configs/ 配下の YAML を読み込み、検証済みの ConfigBundle を生成するローダ。

base レイヤーに環境別レイヤー (`configs/envs/<env>`) を重ねる。環境別レイヤーは
base に存在するキーの値のみ上書きでき、新しいキーを持ち込むことはできない。
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .container import (
    ConfigBundle,
    ConfigLoader,
    InvalidConfigurationError,
    MissingConfigurationError,
)

ENVIRONMENT_VARIABLE = "SERVICE_ENV"
YAML_SUFFIXES = (".yaml", ".yml")


class LoggingConfigModel(BaseModel):
    """dictConfig に渡す logging 設定。version 以外は dictConfig に任せる。"""

    model_config = ConfigDict(extra="allow")

    version: int


class MetricsOptionsModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    host: str = "127.0.0.1"
    port: int = Field(default=0, ge=0)
    default_labels: dict[str, str] = Field(default_factory=dict)
    histogram_buckets: dict[str, list[float]] = Field(default_factory=dict)

    @field_validator("histogram_buckets")
    @classmethod
    def _require_ascending(cls, value: dict[str, list[float]]) -> dict[str, list[float]]:
        for metric, boundaries in value.items():
            if not boundaries:
                raise ValueError(f"histogram_buckets['{metric}'] が空です。")
            if list(boundaries) != sorted(set(boundaries)):
                raise ValueError(f"histogram_buckets['{metric}'] は昇順かつ重複なしである必要があります。")
        return value


class MetricsConfigModel(BaseModel):
    """metrics 設定。provider に応じて options の解釈が変わる。"""

    model_config = ConfigDict(extra="allow")

    provider: str
    options: MetricsOptionsModel = Field(default_factory=MetricsOptionsModel)


class StorageConfigModel(BaseModel):
    """storage 設定。work_dir はローカルストレージのルート。"""

    model_config = ConfigDict(extra="allow")

    work_dir: str

    @field_validator("work_dir")
    @classmethod
    def _require_non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("work_dir は空にできません。")
        return value


class AppConfigModel(BaseModel):
    """
    logging, metrics, storage の 3 セクションを必須とする全体設定。
    その他のセクションは検証せずにそのまま保持する。
    """

    model_config = ConfigDict(extra="allow")

    logging: LoggingConfigModel
    metrics: MetricsConfigModel
    storage: StorageConfigModel


class YamlConfigLoader(ConfigLoader):
    """
    `configs/base` と `configs/envs/<env>` の YAML をレイヤーとして重ねるローダ。
    """

    def __init__(
        self,
        project_root: Path,
        *,
        environment: str | None = None,
        configs_dir_name: str = "configs",
    ) -> None:
        self._configs_root = project_root.resolve() / configs_dir_name
        self._environment = environment or os.getenv(ENVIRONMENT_VARIABLE)

    def load(self) -> ConfigBundle:
        if not self._environment:
            raise MissingConfigurationError(
                f"環境変数 '{ENVIRONMENT_VARIABLE}' が未設定のため、設定をロードできません。"
            )

        base = _read_layer(self._configs_root / "base", required=True)
        overlay = _read_layer(self._configs_root / "envs" / self._environment, required=False)
        _reject_new_keys(base, overlay)

        try:
            validated = AppConfigModel.model_validate(_merge(base, overlay))
        except ValidationError as exc:
            raise InvalidConfigurationError(f"設定値の検証に失敗しました: {exc}") from exc
        return ConfigBundle(root=validated.model_dump())


def _read_layer(directory: Path, *, required: bool) -> dict[str, Any]:
    """
    ディレクトリ配下の YAML をファイル名順にマージする。

    required=False の場合、ディレクトリが無ければ空のレイヤーとして扱う。
    """

    if not directory.exists():
        if required:
            raise MissingConfigurationError(f"設定ディレクトリ ({directory}) が存在しません。")
        return {}
    if not directory.is_dir():
        raise MissingConfigurationError(f"設定ディレクトリ ({directory}) がディレクトリではありません。")

    files = sorted(p for p in directory.rglob("*") if p.is_file() and p.suffix in YAML_SUFFIXES)
    if not files:
        raise MissingConfigurationError(f"{directory} に YAML ファイルが存在しません。")

    layer: dict[str, Any] = {}
    for file_path in files:
        layer = _merge(layer, _read_yaml(file_path))
    return layer


def _read_yaml(file_path: Path) -> Mapping[str, Any]:
    try:
        content = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise InvalidConfigurationError(f"YAML の解析に失敗しました: {file_path}") from exc

    if content is None:
        raise InvalidConfigurationError(f"YAML ファイルが空です: {file_path}")
    if not isinstance(content, Mapping):
        raise InvalidConfigurationError(f"YAML のトップレベルは Mapping である必要があります: {file_path}")
    return content


def _merge(lower: Mapping[str, Any], upper: Mapping[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(lower)
    for key, value in upper.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _merge(current, value)
        else:
            merged[key] = value
    return merged


def _reject_new_keys(base: Mapping[str, Any], overlay: Mapping[str, Any], prefix: str = "") -> None:
    for key, value in overlay.items():
        dotted = f"{prefix}{key}"
        if key not in base:
            raise InvalidConfigurationError(
                f"環境別設定に base で未定義のキー '{dotted}' があります。configs/base に追加してください。"
            )
        if isinstance(value, Mapping):
            if not isinstance(base[key], Mapping):
                raise InvalidConfigurationError(f"設定キー '{dotted}' は base ではマッピングではありません。")
            _reject_new_keys(base[key], value, prefix=f"{dotted}.")
