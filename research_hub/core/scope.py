from typing import List, Optional, Sequence

from research_hub.core.models import Paper, Workspace

WORKSPACE_VIEW_PREFIX = "ws-"

# 固定的视图标识
DASHBOARD_VIEW = "dashboard"
SEARCH_VIEW = "search"
DOCS_VIEW = "docs"
TOOLS_VIEW = "tools"


def workspace_view(workspace_id: str) -> str:
    """返回工作区对应的视图标识"""
    return f"{WORKSPACE_VIEW_PREFIX}{workspace_id}"


def parse_workspace_view(view: Optional[str]) -> Optional[str]:
    """从视图标识中取出工作区ID，不是工作区视图时返回 None"""
    if not view or not view.startswith(WORKSPACE_VIEW_PREFIX):
        return None
    return view[len(WORKSPACE_VIEW_PREFIX):]


def resolve_scope(view: Optional[str], papers: Sequence[Paper], workspaces: Sequence[Workspace]) -> List[Paper]:
    """计算当前视图下处于上下文中的论文

    工作区视图：按论文集合的顺序返回属于该工作区的论文，失效的ID被静默丢弃，
    重复的ID只出现一次；工作区不存在时返回空列表。
    其他视图：返回完整的论文集合。
    """
    workspace_id = parse_workspace_view(view)
    if workspace_id is None:
        return list(papers)

    workspace = next((w for w in workspaces if w.id == workspace_id), None)
    if workspace is None:
        return []

    members = set(workspace.paper_ids)
    return [p for p in papers if p.id in members]
