from typing import Dict, Optional
from pathlib import Path
import json

from research_hub.core.common.logger import logger


class KeyValueStorage:
    """持久化镜像接口

    同步的字符串键值存储，不提供事务，写入要么完整生效要么不生效。
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError("KeyValueStorage must implement get method")

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError("KeyValueStorage must implement set method")

    def remove(self, key: str) -> None:
        raise NotImplementedError("KeyValueStorage must implement remove method")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class MemoryStorage(KeyValueStorage):
    """进程内存中的键值存储，主要用于测试"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class LocalStorage(KeyValueStorage):
    """本地存储，所有键值保存在同一个JSON文件中"""

    def __init__(self, storage_dir: str, storage_namespace: str):
        """初始化LocalStorage

        Args:
            storage_dir: 存储目录
            storage_namespace: 存储命名空间，决定文件名
        """
        self.storage_dir = Path(storage_dir)
        self.storage_namespace = storage_namespace
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    @property
    def storage_file(self) -> Path:
        """获取存储文件路径"""
        return self.storage_dir / f"{self.storage_namespace}.json"

    def read_storage(self) -> Dict[str, str]:
        """读取存储文件中的所有数据

        文件损坏时返回空字典，由上层回退到默认数据。
        """
        if not self.storage_file.exists():
            return {}

        try:
            with open(self.storage_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"读取存储文件失败，忽略已有内容: {self.storage_file} {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"存储文件格式错误，忽略已有内容: {self.storage_file}")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def write_storage(self, data: Dict[str, str]):
        """写入数据到存储文件

        先写临时文件再替换，读者不会看到写了一半的内容。
        """
        tmp_file = self.storage_file.with_suffix(".json.tmp")
        with open(tmp_file, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        tmp_file.replace(self.storage_file)

    def get(self, key: str) -> Optional[str]:
        return self.read_storage().get(key)

    def set(self, key: str, value: str) -> None:
        data = self.read_storage()
        data[key] = value
        self.write_storage(data)

    def remove(self, key: str) -> None:
        data = self.read_storage()
        if data.pop(key, None) is not None:
            self.write_storage(data)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(storage_file={self.storage_file})"
