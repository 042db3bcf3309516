"""
ロギング初期化ロジック。
"""

from __future__ import annotations

import logging
import logging.config
import sys
from typing import Any, Mapping

from .container import InvalidConfigurationError, LoggingConfigurator

ROOT_LOGGER_NAME = "localfs_storage"
CONSOLE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class DictConfigLoggingConfigurator(LoggingConfigurator):
    """
    標準ライブラリの ``logging.config.dictConfig`` を用いたロギング初期化。

    import 時に生成済みのモジュールロガーを無効化しないよう、
    ``disable_existing_loggers`` の既定値は False とする。
    """

    def configure(self, config: Mapping[str, Any]) -> None:
        if "version" not in config:
            raise InvalidConfigurationError("logging 設定に 'version' が存在しません。")

        plain = _to_plain_dict(config)
        plain.setdefault("disable_existing_loggers", False)
        try:
            logging.config.dictConfig(plain)
        except (ValueError, TypeError, AttributeError) as exc:
            raise InvalidConfigurationError("logging 設定の適用に失敗しました。") from exc


def configure_console_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """
    設定ファイルを使わずに ``localfs_storage`` ロガーを標準エラーへ出力する。

    既存のハンドラは呼び出し時点の sys.stderr へのハンドラに置き換える。
    """

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def _to_plain_dict(mapping: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in mapping.items():
        if isinstance(value, Mapping):
            result[key] = _to_plain_dict(value)
        else:
            result[key] = value
    return result
