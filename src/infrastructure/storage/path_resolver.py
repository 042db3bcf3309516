"""
ワークディレクトリを基準に論理パスとネイティブパスを相互変換するモジュール。
"""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass, field
from pathlib import Path

DIR_MODE = 0o755


def to_slash(path: str) -> str:
    """ネイティブ区切りを `/` に置き換える。"""

    if os.sep != "/":
        path = path.replace(os.sep, "/")
    return path


def to_logical_name(dir: str, name: str) -> str:
    """
    論理ディレクトリとエントリ名を `/` で結合し正規化する。

    空のディレクトリはワークディレクトリ直下を表す。
    """

    # 論理名は OS に依存しない文字列として扱う
    return posixpath.normpath(posixpath.join(to_slash(dir), name))


@dataclass(frozen=True)
class WorkDirPathResolver:
    """
    ワークディレクトリ配下の絶対パスを解決する。

    パストラバーサルの検証は行わない。呼び出し側の論理パスを信頼する。
    """

    work_dir: Path = field(default=Path(os.path.abspath(os.sep)))

    def __post_init__(self) -> None:
        if not os.fspath(self.work_dir):
            raise ValueError("work_dir は必須です。")
        normalized = Path(os.path.abspath(Path(self.work_dir).expanduser()))
        object.__setattr__(self, "work_dir", normalized)

    def resolve(self, path: str) -> Path:
        parts = [part for part in to_slash(path).split("/") if part]
        # Path は ".." を畳み込まないため normpath を通す
        return Path(os.path.normpath(self.work_dir.joinpath(*parts)))

    def to_name(self, absolute_path: Path) -> str:
        """解決済みの絶対パスをワークディレクトリからの論理名に戻す。"""

        relative = Path(os.path.relpath(absolute_path, self.work_dir))
        if relative == Path(os.curdir):
            return ""
        return relative.as_posix()

    def ensure_parent_dir(self, path: str) -> Path:
        """
        論理パスの親ディレクトリを再帰的に作成し、解決済みの絶対パスを返す。

        Raises:
            OSError: ディレクトリ作成に失敗した場合。
        """

        absolute = self.resolve(path)
        absolute.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        return absolute
