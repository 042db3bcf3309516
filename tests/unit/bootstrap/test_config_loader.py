from __future__ import annotations

from pathlib import Path

import pytest

from bootstrap import InvalidConfigurationError, MissingConfigurationError, YamlConfigLoader


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture()
def project_root(tmp_path: Path) -> Path:
    _write(
        tmp_path / "configs" / "base" / "app.yaml",
        "logging:\n"
        "  version: 1\n"
        "metrics:\n"
        "  provider: noop\n"
        "storage:\n"
        "  work_dir: var/storage\n",
    )
    return tmp_path


def test_load_merges_environment_overlay(project_root: Path) -> None:
    _write(project_root / "configs" / "envs" / "prod" / "storage.yaml", "storage:\n  work_dir: /srv/data\n")

    bundle = YamlConfigLoader(project_root, environment="prod").load()

    assert bundle.require_value("storage", "work_dir") == "/srv/data"
    assert bundle.require_value("metrics", "provider") == "noop"


def test_load_without_overlay_directory(project_root: Path) -> None:
    bundle = YamlConfigLoader(project_root, environment="dev").load()

    assert bundle.require_value("storage", "work_dir") == "var/storage"


def test_environment_comes_from_service_env(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SERVICE_ENV", raising=False)
    with pytest.raises(MissingConfigurationError):
        YamlConfigLoader(project_root).load()

    monkeypatch.setenv("SERVICE_ENV", "dev")
    assert YamlConfigLoader(project_root).load().require_section("logging")["version"] == 1


def test_overlay_rejects_unknown_keys(project_root: Path) -> None:
    _write(project_root / "configs" / "envs" / "dev" / "extra.yaml", "storage:\n  bucket: nope\n")

    with pytest.raises(InvalidConfigurationError):
        YamlConfigLoader(project_root, environment="dev").load()


def test_empty_work_dir_is_rejected(tmp_path: Path) -> None:
    _write(
        tmp_path / "configs" / "base" / "app.yaml",
        "logging:\n  version: 1\nmetrics:\n  provider: noop\nstorage:\n  work_dir: '  '\n",
    )

    with pytest.raises(InvalidConfigurationError):
        YamlConfigLoader(tmp_path, environment="dev").load()


def test_missing_base_directory(tmp_path: Path) -> None:
    with pytest.raises(MissingConfigurationError):
        YamlConfigLoader(tmp_path, environment="dev").load()
