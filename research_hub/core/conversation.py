import time
from datetime import datetime
from typing import List, Sequence

from research_hub.core.models import ChatMessage, ChatRole, Paper

BRAINY_LOG = "brainy"
WORKSPACE_LOG = "workspace"


class ConversationLog:
    """一条有序的对话记录

    Brainy 和工作区助手各自持有一条，互不共享历史，也不会持久化。
    typing 表示该对话正在等待助手回复。
    """

    def __init__(self, name: str):
        self.name = name
        self.messages: List[ChatMessage] = []
        self.typing = False
        self.draft = ""
        self._last_id = 0

    def _next_id(self) -> str:
        # 基于毫秒时间戳，同一毫秒内递增保证唯一
        ms = int(time.time() * 1000)
        if ms <= self._last_id:
            ms = self._last_id + 1
        self._last_id = ms
        return str(ms)

    def append(self, role: ChatRole, content: str) -> ChatMessage:
        message = ChatMessage(
            id=self._next_id(),
            role=role,
            content=content,
            timestamp=datetime.now().strftime("%H:%M:%S"),
        )
        self.messages.append(message)
        return message

    def history(self) -> List[ChatMessage]:
        return list(self.messages)

    def clear(self):
        self.messages.clear()
        self.typing = False

    def __len__(self) -> int:
        return len(self.messages)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, messages={len(self.messages)}, typing={self.typing})"


def format_history(history: Sequence[ChatMessage]) -> str:
    """把历史消息渲染为 `User: ...` / `Assistant: ...` 行"""
    return "\n".join(
        f"{'User' if m.role == ChatRole.USER else 'Assistant'}: {m.content}"
        for m in history
    )


def build_brainy_context(papers: Sequence[Paper]) -> str:
    """Brainy 只看到整个论文集合的标题，不受当前视图影响"""
    if not papers:
        return "The user has no papers in their workspace yet."
    titles = "\n".join(f"- {p.title}" for p in papers)
    return f"You have access to the following papers in the user's workspace:\n{titles}"


def build_workspace_context(papers: Sequence[Paper]) -> str:
    """工作区助手看到当前范围内论文的完整摘要"""
    return "\n\n".join(f"[{p.title}]\n{p.abstract}" for p in papers)


def build_brainy_prompt(query: str, papers: Sequence[Paper], history: Sequence[ChatMessage]) -> str:
    return (
        "Your name is Brainy. You are an elite AI research assistant.\n\n"
        f"CONTEXT:\n{build_brainy_context(papers)}\n\n"
        f"HISTORY:\n{format_history(history)}\n\n"
        f"USER: {query}\n\n"
        "Answer professionally and helpfully. Keep it concise."
    )


def build_workspace_prompt(query: str, papers: Sequence[Paper], history: Sequence[ChatMessage]) -> str:
    return (
        "Using the provided context, answer the research query.\n\n"
        f"CONTEXT:\n{build_workspace_context(papers)}\n\n"
        f"HISTORY:\n{format_history(history)}\n\n"
        f"QUERY: {query}"
    )
