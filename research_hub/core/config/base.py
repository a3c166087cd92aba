from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, ConfigDict


class YamlConfig(BaseModel):
    """配置基类，未知字段会被忽略"""

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def parse(cls, config_path: str):
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, 'r', encoding='utf-8') as f:
            config_dict: Dict[str, Any] = yaml.safe_load(f) or {}
            return cls(**config_dict)

    @classmethod
    def from_yaml(cls, yaml_path: str):
        return cls.parse(yaml_path)
