from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None]
    return []


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None


def _as_opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass
class AnalysisResult:
    """AI生成的结构化论文分析，所有字段均可缺失"""
    key_findings: Optional[List[str]] = None
    methodology: Optional[str] = None
    limitations: Optional[List[str]] = None
    future_work: Optional[str] = None
    significance_score: Optional[int] = None   # 1-100
    executive_summary: Optional[str] = None

    # 模型返回 camelCase，本地存储使用 snake_case
    _ALIASES = {
        "keyFindings": "key_findings",
        "futureWork": "future_work",
        "significanceScore": "significance_score",
        "executiveSummary": "executive_summary",
    }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'AnalysisResult':
        values = {cls._ALIASES.get(k, k): v for k, v in data.items()}
        score = _as_int(values.get("significance_score"))
        if score is not None:
            score = min(max(score, 1), 100)
        return cls(
            key_findings=_as_str_list(values["key_findings"]) if values.get("key_findings") is not None else None,
            methodology=_as_opt_str(values.get("methodology")),
            limitations=_as_str_list(values["limitations"]) if values.get("limitations") is not None else None,
            future_work=_as_opt_str(values.get("future_work")),
            significance_score=score,
            executive_summary=_as_opt_str(values.get("executive_summary")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PaperCandidate:
    """候选论文，来自AI搜索结果，字段都不保证存在"""
    title: Optional[str] = None
    authors: List[str] = field(default_factory=list)
    year: Optional[int] = None
    abstract: Optional[str] = None
    journal: Optional[str] = None
    citations: Optional[int] = None
    url: Optional[str] = None
    tags: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'PaperCandidate':
        title = data.get("title")
        return cls(
            title=str(title) if title is not None else None,
            authors=_as_str_list(data.get("authors")),
            year=_as_int(data.get("year")),
            abstract=_as_opt_str(data.get("abstract")),
            journal=_as_opt_str(data.get("journal")),
            citations=_as_int(data.get("citations")),
            url=_as_opt_str(data.get("url")),
            tags=_as_str_list(data["tags"]) if data.get("tags") is not None else None,
        )


@dataclass
class Paper:
    """论文数据模型"""
    id: str                     # 论文唯一标识，创建后不可变
    title: str                  # 论文标题，去重键
    authors: List[str]          # 作者列表
    year: Optional[int]         # 发表年份
    abstract: str               # 论文摘要
    added_at: str               # 加入时间，ISO格式
    journal: Optional[str] = None
    citations: int = 0
    url: str = ""
    tags: List[str] = field(default_factory=list)
    analysis: Optional[AnalysisResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Paper':
        analysis = data.get("analysis")
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            authors=_as_str_list(data.get("authors")),
            year=_as_int(data.get("year")),
            abstract=str(data.get("abstract") or ""),
            added_at=str(data.get("added_at") or data.get("addedAt") or ""),
            journal=_as_opt_str(data.get("journal")),
            citations=max(_as_int(data.get("citations")) or 0, 0),
            url=str(data.get("url") or ""),
            tags=_as_str_list(data.get("tags")),
            analysis=AnalysisResult.from_dict(analysis) if isinstance(analysis, Mapping) else None,
        )


@dataclass
class Workspace:
    """工作区，通过论文ID引用一组论文"""
    id: str
    name: str
    description: str
    paper_ids: List[str]        # 可能包含重复或失效的ID
    created_at: str
    color: str = "indigo"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Workspace':
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            paper_ids=_as_str_list(data.get("paper_ids", data.get("paperIds"))),
            created_at=str(data.get("created_at") or data.get("createdAt") or ""),
            color=str(data.get("color") or "indigo"),
        )


class ChatRole(str, Enum):
    """消息角色，只有两种"""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    id: str
    role: ChatRole
    content: str
    timestamp: str              # 创建时格式化的显示时间


@dataclass
class UploadedDocument:
    """用户上传的单个文件"""
    filename: str
    content_type: Optional[str] = None
    data: bytes = b""


