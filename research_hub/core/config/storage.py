from typing import Literal
from .base import YamlConfig


class StorageConfig(YamlConfig):
    storage_type: Literal["local", "memory"] = "local"
    base_path: str = "./data"
    namespace: str = "research_hub"
