"""
ランタイム依存関係のビルダー。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from bootstrap import (
    BootstrapContainer,
    BootstrapContext,
    DictConfigLoggingConfigurator,
    InvalidConfigurationError,
    YamlConfigLoader,
    default_metrics_configurator,
)
from infrastructure.storage import LocalFileSystemStorage

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def build_local_storage(
    storage_config: Mapping[str, Any],
    *,
    project_root: Path = PROJECT_ROOT,
) -> LocalFileSystemStorage:
    """
    storage セクションから LocalFileSystemStorage を生成する。

    相対パスの work_dir は project_root を基準に解決する。
    ディレクトリの存在確認や作成は行わない。
    """

    raw = storage_config.get("work_dir")
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidConfigurationError("storage.work_dir は非空の str である必要があります。")

    work_dir = Path(raw).expanduser()
    if not work_dir.is_absolute():
        work_dir = project_root / work_dir
    return LocalFileSystemStorage(work_dir)


def build_bootstrap_container(
    *,
    project_root: Path = PROJECT_ROOT,
    environment: str | None = None,
) -> BootstrapContainer:
    return BootstrapContainer(
        project_root=project_root,
        config_loader_factory=lambda root: YamlConfigLoader(root, environment=environment),
        logging_configurator=DictConfigLoggingConfigurator(),
        metrics_configurator=default_metrics_configurator(),
        storage_factory=lambda config: build_local_storage(config, project_root=project_root),
    )


def bootstrap(*, project_root: Path = PROJECT_ROOT, environment: str | None = None) -> BootstrapContext:
    return build_bootstrap_container(project_root=project_root, environment=environment).initialize()
