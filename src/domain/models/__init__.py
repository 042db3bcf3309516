"""
ドメインエンティティの公開API。
"""

from .storage_object import ObjectType, StorageMeta, StorageObject

__all__ = [
    "ObjectType",
    "StorageMeta",
    "StorageObject",
]
