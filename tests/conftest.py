import asyncio
from typing import Any, List, Optional

import pytest

from research_hub.core.config import OrchestratorConfig
from research_hub.core.session import ResearchSession
from research_hub.core.storage import MemoryStorage
from research_hub.core.store import EntityStore


class FakeLLMClient:
    """按脚本返回结果的AI替身

    脚本中的每一项对应一次调用：
    - str: 直接返回
    - Exception: 抛出
    - asyncio.Future: 等待它完成后返回其结果，用于控制完成顺序
    脚本用完后返回 default。
    """

    def __init__(self, script: Optional[List[Any]] = None, default: str = ""):
        self.script = list(script or [])
        self.default = default
        self.calls: List[dict] = []
        self.closed = False

    async def generate(self, prompt: str, *, web_search: bool = False, thinking: bool = False) -> str:
        self.calls.append({"prompt": prompt, "web_search": web_search, "thinking": thinking})
        if not self.script:
            return self.default
        item = self.script.pop(0)
        if isinstance(item, asyncio.Future):
            item = await item
        if isinstance(item, Exception):
            raise item
        return item

    async def close(self):
        self.closed = True


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage) -> EntityStore:
    return EntityStore(storage)


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def session(store: EntityStore, fake_llm: FakeLLMClient) -> ResearchSession:
    return ResearchSession(store, fake_llm, OrchestratorConfig())
