from research_hub.core.operators.processor.discovery_search import DiscoverySearch
from research_hub.core.operators.processor.document_summarizer import (
    DocumentSummarizer,
    derive_title,
    validate_document,
)
from research_hub.core.operators.processor.lab_tool import LabTool, LabToolRequest, LabToolRunner
from research_hub.core.operators.processor.chat_responder import (
    ChatRequest,
    ChatResponder,
    brainy_responder,
    workspace_responder,
)

__all__ = [
    "DiscoverySearch",
    "DocumentSummarizer",
    "derive_title",
    "validate_document",
    "LabTool",
    "LabToolRequest",
    "LabToolRunner",
    "ChatRequest",
    "ChatResponder",
    "brainy_responder",
    "workspace_responder",
]
