"""
ストレージ上のエントリを表すドメインエンティティ。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ObjectType(str, Enum):
    """エントリ種別。"""

    FILE = "file"
    DIR = "dir"
    STREAM = "stream"
    INVALID = "invalid"


def _freeze(mapping: Mapping[str, object] | None) -> Mapping[str, object]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class StorageObject:
    """
    クエリ毎に生成されるストレージオブジェクト。

    Attributes:
        id: ホスト OS ネイティブ形式の絶対パス。
        name: `/` 区切りの論理パス。
        type: エントリ種別。
        size: バイト数。
        updated_at: 最終更新時刻 (UTC)。ストリームの場合は None。
        content_type: 拡張子から推定した MIME タイプ。
        metadata: 追加属性。返却後は変更できない。
    """

    id: str
    name: str
    type: ObjectType
    size: int = 0
    updated_at: datetime | None = None
    content_type: str | None = None
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("id は必須です。")
        if not isinstance(self.type, ObjectType):
            raise TypeError("type は ObjectType である必要があります。")
        if self.size < 0:
            raise ValueError("size は 0 以上である必要があります。")
        object.__setattr__(self, "metadata", _freeze(self.metadata))

    @property
    def is_dir(self) -> bool:
        return self.type is ObjectType.DIR

    @property
    def is_file(self) -> bool:
        return self.type is ObjectType.FILE

    def to_dict(self) -> dict[str, object]:
        """CLI 出力などで利用する JSON 互換の辞書を返す。"""

        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "size": self.size,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "content_type": self.content_type,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class StorageMeta:
    """ストレージ全体の静的メタデータ。"""

    work_dir: str
    name: str = ""
    extra: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", _freeze(self.extra))

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "work_dir": self.work_dir, "extra": dict(self.extra)}
