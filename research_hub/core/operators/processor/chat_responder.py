from dataclasses import dataclass, field
from typing import Callable, List, Sequence

from research_hub.core.operators.base import Operator
from research_hub.core.models import ChatMessage, Paper
from research_hub.core.common import logger
from research_hub.core.conversation import build_brainy_prompt, build_workspace_prompt
from research_hub.core.llm import LLMClient

BRAINY_EMPTY_REPLY = "I'm listening."
BRAINY_ERROR_REPLY = "Brainy is currently offline due to a neural link error. (RPC Error)"
WORKSPACE_EMPTY_REPLY = "Synthesis failed."
WORKSPACE_ERROR_REPLY = "Error connecting to the research agent."

PromptBuilder = Callable[[str, Sequence[Paper], Sequence[ChatMessage]], str]


@dataclass
class ChatRequest:
    query: str
    papers: List[Paper] = field(default_factory=list)
    history: List[ChatMessage] = field(default_factory=list)   # 本轮之前的消息


class ChatResponder(Operator):
    """对话回复算子

    Brainy 和工作区助手共用这个实现，区别只在于上下文的构造方式和兜底文本。
    """

    def __init__(
        self,
        client: LLMClient,
        name: str,
        prompt_builder: PromptBuilder,
        empty_reply: str,
        error_reply: str,
    ):
        self.client = client
        self.name = name
        self.prompt_builder = prompt_builder
        self.empty_reply = empty_reply
        self.error_reply = error_reply

    async def process(self, request: ChatRequest) -> str:
        prompt = self.prompt_builder(request.query, request.papers, request.history)
        logger.debug(f"[{self.name}] prompt: {prompt}")
        try:
            text = await self.client.generate(prompt)
        except Exception as e:
            logger.error(f"[{self.name}] 对话请求失败: {str(e)}")
            return self.error_reply
        return text or self.empty_reply

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


def brainy_responder(client: LLMClient) -> ChatResponder:
    return ChatResponder(client, "brainy", build_brainy_prompt, BRAINY_EMPTY_REPLY, BRAINY_ERROR_REPLY)


def workspace_responder(client: LLMClient) -> ChatResponder:
    return ChatResponder(client, "workspace", build_workspace_prompt, WORKSPACE_EMPTY_REPLY, WORKSPACE_ERROR_REPLY)
