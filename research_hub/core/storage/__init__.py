import os

from research_hub.core.config import StorageConfig
from research_hub.core.storage.local_storage import KeyValueStorage, LocalStorage, MemoryStorage


def create_storage(config: StorageConfig) -> KeyValueStorage:
    """根据配置创建持久化镜像"""
    if config.storage_type == "memory":
        return MemoryStorage()
    return LocalStorage(os.path.join(config.base_path, "state"), config.namespace)


__all__ = [
    "KeyValueStorage",
    "LocalStorage",
    "MemoryStorage",
    "create_storage",
]
