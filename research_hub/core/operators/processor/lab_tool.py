from dataclasses import dataclass, field
from enum import Enum
from typing import List

from research_hub.core.operators.base import Operator
from research_hub.core.models import Paper
from research_hub.core.common import logger
from research_hub.core.errors import ValidationError
from research_hub.core.llm import LLMClient

NO_PAPERS_CONTEXT = "No papers in workspace."
EMPTY_ANALYSIS = "No analysis available."
LAB_TOOL_ERROR = "Error executing analysis. Please check system logs."
CONTEXT_SEPARATOR = "\n\n---\n\n"


class LabTool(str, Enum):
    """AI Lab 工具"""

    SEMANTIC_WEAVER = "Semantic Weaver"
    CONFLICT_RESOLVER = "Conflict Resolver"
    SYNTHESIS_ENGINE = "Synthesis Engine"
    CITATION_FORECASTER = "Citation Forecaster"

    @classmethod
    def parse(cls, name: str) -> 'LabTool':
        try:
            return cls(name)
        except ValueError:
            raise ValidationError(f"Unknown lab tool: {name}") from None


@dataclass
class LabToolRequest:
    tool: LabTool
    papers: List[Paper] = field(default_factory=list)


def build_lab_context(papers: List[Paper]) -> str:
    """把论文集合拼接为一段文本，集合为空时使用占位文本"""
    if not papers:
        return NO_PAPERS_CONTEXT
    return CONTEXT_SEPARATOR.join(f"Title: {p.title}\nAbstract: {p.abstract}" for p in papers)


def build_lab_prompt(tool: LabTool, papers: List[Paper]) -> str:
    return (
        f"TASK: {tool.value}\n\n"
        f"RESEARCH CONTEXT:\n{build_lab_context(papers)}\n\n"
        "Instructions:\n"
        'Perform deep-dive analysis. If "Semantic Weaver", identify hidden connections.\n'
        'If "Conflict Resolver", highlight methodology disagreements.\n'
        'If "Synthesis Engine", create a summary of common themes.\n'
        'If "Citation Forecaster", project the future citation growth of each paper.\n\n'
        "Format as professional Markdown."
    )


class LabToolRunner(Operator):
    """执行 AI Lab 工具的算子，使用深度推理模式"""

    def __init__(self, client: LLMClient):
        self.client = client

    async def process(self, request: LabToolRequest) -> str:
        """执行工具并返回 Markdown 文本

        失败不会被静默处理，而是返回固定的错误提示文本。
        """
        logger.info(f"执行 Lab 工具: {request.tool.value}, {len(request.papers)} 篇论文")
        try:
            text = await self.client.generate(build_lab_prompt(request.tool, request.papers), thinking=True)
        except Exception as e:
            logger.error(f"Lab 工具执行失败 {request.tool.value}: {str(e)}")
            return LAB_TOOL_ERROR
        return text or EMPTY_ANALYSIS
