import os
from typing import Optional
from pathlib import Path
from pydantic import Field
from research_hub.core.config.base import YamlConfig
from research_hub.core.config.llm import LLMConfig
from research_hub.core.config.storage import StorageConfig
from research_hub.core.config.orchestrator import OrchestratorConfig

class Config(YamlConfig):
    llm: LLMConfig = Field(default_factory=LLMConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    orchestrator: OrchestratorConfig = Field(default_factory=OrchestratorConfig)

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> 'Config':
        """加载配置，文件不存在时使用默认值，并用环境变量补全LLM凭证"""
        if config_path and Path(config_path).exists():
            config = cls.from_yaml(config_path)
        else:
            config = cls()

        if not config.llm.api_key:
            config.llm.api_key = os.environ.get("LLM_API_KEY", "")
        if not config.llm.base_url:
            config.llm.base_url = os.environ.get("LLM_BASE_URL", "")
        if os.environ.get("CHAT_MODEL_NAME"):
            config.llm.model_name = os.environ["CHAT_MODEL_NAME"]
        return config

# 为了方便使用，导出主要的类
__all__ = ['Config', 'LLMConfig', 'StorageConfig', 'OrchestratorConfig', 'YamlConfig']
