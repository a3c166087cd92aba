from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from research_hub.core.common import logger
from research_hub.core.config import Config, OrchestratorConfig
from research_hub.core.conversation import BRAINY_LOG, WORKSPACE_LOG, ConversationLog
from research_hub.core.errors import ValidationError
from research_hub.core.llm import LLMClient
from research_hub.core.models import (
    AnalysisResult,
    ChatMessage,
    ChatRole,
    Paper,
    PaperCandidate,
    UploadedDocument,
)
from research_hub.core.operators.base import TaskSlot
from research_hub.core.operators.processor import (
    ChatRequest,
    ChatResponder,
    DiscoverySearch,
    DocumentSummarizer,
    LabTool,
    LabToolRequest,
    LabToolRunner,
    brainy_responder,
    derive_title,
    validate_document,
    workspace_responder,
)
from research_hub.core.operators.processor.document_summarizer import UNTITLED_DOCUMENT
from research_hub.core.operators.processor.lab_tool import LAB_TOOL_ERROR
from research_hub.core.scope import DASHBOARD_VIEW, resolve_scope
from research_hub.core.storage import create_storage
from research_hub.core.store import EntityStore, UserPreferences
from research_hub.core.store.importer import CandidateLike, candidate_title

INGESTED_ABSTRACT = "Document ingested and indexed for workspace analysis."
NO_SUMMARY_FINDING = "No structured summary generated."

SEARCH_SLOT = "search"
INGEST_SLOT = "ingest"
LAB_SLOT = "lab"


@dataclass
class ActiveAnalysis:
    """当前展示的分析报告"""
    paper: Paper
    summary: AnalysisResult


class ResearchSession:
    """研究工作区的会话状态和AI任务编排

    持有实体集合、两条对话记录和各个AI槽位的临时结果。
    每个AI操作占用自己的槽位，互不阻塞；结果只在请求仍然有效时才被应用。
    所有AI错误都在算子边界被转换为兜底结果，这里的异步方法不会因为AI失败而抛出异常，
    只有输入校验失败会同步抛出 ValidationError。
    """

    def __init__(
        self,
        store: EntityStore,
        client: LLMClient,
        config: Optional[OrchestratorConfig] = None,
        preferences: Optional[UserPreferences] = None,
    ):
        config = config or OrchestratorConfig()
        self.store = store
        self.client = client
        self.config = config
        self.preferences = preferences or UserPreferences(store.storage)
        self.active_view = DASHBOARD_VIEW

        # 临时结果，不持久化
        self.search_results: List[PaperCandidate] = []
        self.active_analysis: Optional[ActiveAnalysis] = None
        self.lab_result: Optional[str] = None

        self.brainy_log = ConversationLog(BRAINY_LOG)
        self.workspace_log = ConversationLog(WORKSPACE_LOG)

        self.slots: Dict[str, TaskSlot] = {
            SEARCH_SLOT: TaskSlot(SEARCH_SLOT, config.search_timeout),
            INGEST_SLOT: TaskSlot(INGEST_SLOT, config.summarize_timeout),
            LAB_SLOT: TaskSlot(LAB_SLOT, config.lab_timeout),
            BRAINY_LOG: TaskSlot(BRAINY_LOG, config.chat_timeout),
            WORKSPACE_LOG: TaskSlot(WORKSPACE_LOG, config.chat_timeout),
        }

        self.discovery = DiscoverySearch(client, config.search_result_count)
        self.summarizer = DocumentSummarizer(client)
        self.lab_runner = LabToolRunner(client)
        self.brainy = brainy_responder(client)
        self.workspace_agent = workspace_responder(client)

    @classmethod
    def from_config(cls, config: Config) -> 'ResearchSession':
        storage = create_storage(config.storage)
        store = EntityStore(storage)
        return cls(store, LLMClient(config.llm), config.orchestrator)

    # ------------------------------------------------------------------
    # 视图与范围
    # ------------------------------------------------------------------

    def set_view(self, view: str):
        self.active_view = view

    def scoped_papers(self, view: Optional[str] = None) -> List[Paper]:
        """返回指定视图（默认当前视图）下处于上下文中的论文"""
        return resolve_scope(
            view if view is not None else self.active_view,
            self.store.list_papers(),
            self.store.list_workspaces(),
        )

    # ------------------------------------------------------------------
    # 导入
    # ------------------------------------------------------------------

    def import_paper(self, candidate: CandidateLike) -> Optional[Paper]:
        """导入一篇候选论文，标题已存在时返回 None"""
        return self.store.add_paper(candidate)

    def is_imported(self, candidate: CandidateLike) -> bool:
        return self.store.has_title(candidate_title(candidate))

    def _paper_titled(self, title: str) -> Optional[Paper]:
        return next((p for p in self.store.list_papers() if p.title == title), None)

    # ------------------------------------------------------------------
    # AI 操作
    # ------------------------------------------------------------------

    async def search(self, query: str) -> Optional[List[PaperCandidate]]:
        """搜索论文，结果替换之前的搜索结果

        空白的 query 直接忽略，返回 None。被更新的搜索取代的请求，
        其结果会被返回给调用方，但不会写入 search_results。
        """
        if not query or not query.strip():
            logger.debug("搜索关键词为空，忽略")
            return None

        outcome = await self.slots[SEARCH_SLOT].run(self.discovery.process(query), fallback=[])
        if outcome.current:
            self.search_results = outcome.value
        return outcome.value

    async def ingest_document(self, document: UploadedDocument) -> Paper:
        """导入上传的PDF并生成分析

        无论分析是否成功都会得到一篇论文。同名论文已存在时返回已有的论文，
        展示的也是已有论文的分析，本次新生成的分析会被丢弃。

        Raises:
            UnsupportedDocumentError: 文件不是PDF，此时不会调用AI
        """
        validate_document(document)
        title = derive_title(document.filename)

        outcome = await self.slots[INGEST_SLOT].run(self.summarizer.process(title), fallback=None)
        analysis: Optional[AnalysisResult] = outcome.value

        candidate = PaperCandidate(
            title=title,
            authors=["Uploaded Asset"],
            year=date.today().year,
            abstract=(analysis.executive_summary if analysis and analysis.executive_summary else INGESTED_ABSTRACT),
            journal="Personal Repository",
            citations=0,
            url="",
            tags=["uploaded", "private"],
        )
        paper = self.store.add_paper(candidate, analysis)
        if paper is None:
            paper = self._paper_titled(title)
            if paper is None:
                logger.warning(f"标题无法用于导入，改用默认标题: {title!r}")
                candidate.title = UNTITLED_DOCUMENT
                paper = self.store.add_paper(candidate, analysis) or self._paper_titled(UNTITLED_DOCUMENT)
            else:
                discarded = "，新生成的分析被丢弃" if analysis is not None else ""
                logger.info(f"同名论文已存在，保留原有记录{discarded}: {title}")
                analysis = paper.analysis

        if outcome.current:
            self.active_analysis = ActiveAnalysis(
                paper=paper,
                summary=analysis or AnalysisResult(key_findings=[NO_SUMMARY_FINDING]),
            )
        return paper

    async def run_lab_tool(self, tool: str) -> str:
        """在完整的论文集合上执行 Lab 工具，不受当前视图影响

        Raises:
            ValidationError: 未知的工具名
        """
        lab_tool = LabTool.parse(tool)
        self.lab_result = None
        request = LabToolRequest(tool=lab_tool, papers=self.store.list_papers())

        outcome = await self.slots[LAB_SLOT].run(self.lab_runner.process(request), fallback=LAB_TOOL_ERROR)
        if outcome.current:
            self.lab_result = outcome.value
        return outcome.value

    async def chat_with_brainy(self, text: Optional[str] = None) -> Optional[ChatMessage]:
        """与 Brainy 对话，上下文是整个论文集合的标题"""
        return await self._chat(self.brainy_log, self.brainy, text, self.store.list_papers())

    async def chat_with_workspace(self, text: Optional[str] = None, view: Optional[str] = None) -> Optional[ChatMessage]:
        """与工作区助手对话，上下文是当前范围内论文的摘要"""
        return await self._chat(self.workspace_log, self.workspace_agent, text, self.scoped_papers(view))

    async def _chat(
        self,
        log: ConversationLog,
        responder: ChatResponder,
        text: Optional[str],
        papers: List[Paper],
    ) -> Optional[ChatMessage]:
        """一轮对话

        用户消息在等待回复之前就写入记录，保证它总是先于助手回复出现。
        上一轮尚未完成时拒绝新的提交，返回 None。
        """
        query = log.draft if text is None else text
        if not query or not query.strip():
            return None
        if log.typing:
            logger.warning(f"[{log.name}] 上一轮对话尚未完成，忽略本次提交")
            return None

        history = log.history()
        log.append(ChatRole.USER, query)
        log.draft = ""
        log.typing = True
        try:
            outcome = await self.slots[log.name].run(
                responder.process(ChatRequest(query=query, papers=papers, history=history)),
                fallback=responder.error_reply,
            )
        finally:
            log.typing = False
        return log.append(ChatRole.ASSISTANT, outcome.value)

    # ------------------------------------------------------------------
    # 槽位状态
    # ------------------------------------------------------------------

    def status(self) -> Dict[str, bool]:
        """各个槽位是否忙碌"""
        return {name: slot.busy for name, slot in self.slots.items()}

    def cancel(self, slot_name: str) -> bool:
        slot = self.slots.get(slot_name)
        if slot is None:
            raise ValidationError(f"Unknown slot: {slot_name}")
        return slot.cancel()

    async def close(self):
        for slot in self.slots.values():
            slot.cancel()
        await self.client.close()
