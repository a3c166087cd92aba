import uuid
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union

from research_hub.core.models import AnalysisResult, Paper, PaperCandidate

CandidateLike = Union[PaperCandidate, Mapping[str, Any]]


def new_paper_id() -> str:
    return f"p-{uuid.uuid4().hex}"


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def to_candidate(candidate: CandidateLike) -> PaperCandidate:
    if isinstance(candidate, PaperCandidate):
        return candidate
    return PaperCandidate.from_dict(candidate)


def candidate_title(candidate: CandidateLike) -> Optional[str]:
    """返回可用于去重的标题，空标题返回 None"""
    title = to_candidate(candidate).title
    if title is None or not title.strip():
        return None
    return title


def materialize_paper(candidate: CandidateLike, analysis: Optional[AnalysisResult] = None) -> Paper:
    """把候选论文补全为完整的 Paper

    id 和 added_at 总是重新生成，即使候选中带有这些字段；
    citations 缺失时为 0，tags 缺失时为空列表。
    """
    c = to_candidate(candidate)
    return Paper(
        id=new_paper_id(),
        title=c.title or "",
        authors=list(c.authors),
        year=c.year,
        abstract=c.abstract or "",
        added_at=now_iso(),
        journal=c.journal,
        citations=max(c.citations or 0, 0),
        url=c.url or "",
        tags=list(c.tags) if c.tags is not None else [],
        analysis=analysis,
    )
