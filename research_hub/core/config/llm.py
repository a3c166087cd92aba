from typing import Optional
from .base import YamlConfig


class LLMConfig(YamlConfig):
    model_name: str = "gpt-4o-mini"
    api_key: Optional[str] = ""
    base_url: Optional[str] = ""
    temperature: float = 0.7
    max_tokens: int = 2000
    # 联网搜索使用的模型，为空时退回 model_name
    search_model_name: str = ""
    # 深度推理使用的模型，为空时退回 model_name 并放大 token 预算
    reasoning_model_name: str = ""
    reasoning_effort: str = "high"
    thinking_max_tokens: int = 8000
