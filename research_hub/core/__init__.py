from research_hub.core.operators.base import Operator, OperatorStatus, TaskSlot, SlotOutcome
from research_hub.core.models import (
    Paper,
    PaperCandidate,
    Workspace,
    ChatMessage,
    ChatRole,
    AnalysisResult,
    UploadedDocument,
)
from research_hub.core.errors import (
    ResearchHubError,
    ValidationError,
    UnsupportedDocumentError,
    NotFoundError,
)
from research_hub.core.storage import KeyValueStorage, LocalStorage, MemoryStorage
from research_hub.core.store import EntityStore, UserPreferences
from research_hub.core.operators.processor import (
    DiscoverySearch,
    DocumentSummarizer,
    LabTool,
    LabToolRunner,
    ChatResponder,
)
from research_hub.core.llm import LLMClient
from research_hub.core.session import ResearchSession

__all__ = [
    # 核心组件
    'Operator',
    'OperatorStatus',
    'TaskSlot',
    'SlotOutcome',
    'ResearchSession',
    'LLMClient',

    # 数据模型
    'Paper',
    'PaperCandidate',
    'Workspace',
    'ChatMessage',
    'ChatRole',
    'AnalysisResult',
    'UploadedDocument',

    # 异常
    'ResearchHubError',
    'ValidationError',
    'UnsupportedDocumentError',
    'NotFoundError',

    # 存储
    'KeyValueStorage',
    'LocalStorage',
    'MemoryStorage',
    'EntityStore',
    'UserPreferences',

    # AI算子
    'DiscoverySearch',
    'DocumentSummarizer',
    'LabTool',
    'LabToolRunner',
    'ChatResponder',
]
