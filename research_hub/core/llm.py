from typing import Any, Dict, Optional

import openai

from research_hub.core.common import logger
from research_hub.core.config import LLMConfig

SYSTEM_PROMPT = "You are a professional academic research assistant."


class LLMClient:
    """外部生成式AI的调用封装

    输入是一段纯文本 prompt 加上模式开关（联网搜索、深度推理），输出是纯文本。
    调用失败时直接抛出异常，由各个算子在边界处转换为兜底结果。
    """

    def __init__(self, llm_config: LLMConfig):
        self.config = llm_config
        self._client: Optional[openai.AsyncOpenAI] = None

    @property
    def client(self) -> openai.AsyncOpenAI:
        # 延迟创建，没有配置API密钥时应用仍然可以启动
        if self._client is None:
            self._client = openai.AsyncOpenAI(
                api_key=self.config.api_key or None,
                base_url=self.config.base_url or None,
            )
        return self._client

    def _request_options(self, web_search: bool, thinking: bool) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "model": self.config.model_name,
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }

        if web_search and self.config.search_model_name:
            options["model"] = self.config.search_model_name
            options["web_search_options"] = {}
            # 搜索模型不接受 temperature
            options.pop("temperature")

        if thinking:
            if self.config.reasoning_model_name:
                options["model"] = self.config.reasoning_model_name
                options["reasoning_effort"] = self.config.reasoning_effort
                options.pop("temperature", None)
                options.pop("max_tokens")
                options["max_completion_tokens"] = self.config.thinking_max_tokens
            else:
                options["max_tokens"] = self.config.thinking_max_tokens

        return options

    async def generate(self, prompt: str, *, web_search: bool = False, thinking: bool = False) -> str:
        options = self._request_options(web_search, thinking)
        logger.debug(f"调用模型 {options['model']}: web_search={web_search} thinking={thinking} prompt长度={len(prompt)}")

        response = await self.client.chat.completions.create(
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            **options,
        )
        return response.choices[0].message.content or ""

    async def close(self):
        if self._client is not None:
            await self._client.close()
            self._client = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.config.model_name})"
