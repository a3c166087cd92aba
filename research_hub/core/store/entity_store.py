import copy
import json
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from research_hub.core.common.logger import logger
from research_hub.core.errors import NotFoundError, ValidationError
from research_hub.core.models import AnalysisResult, Paper, Workspace
from research_hub.core.storage import KeyValueStorage
from research_hub.core.store.importer import CandidateLike, candidate_title, materialize_paper
from research_hub.core.store.seed import default_papers, default_workspaces

PAPERS_KEY = "rh_papers"
WORKSPACES_KEY = "rh_workspaces"

T = TypeVar("T")


@dataclass(frozen=True)
class StoreSnapshot:
    """某一时刻的完整集合副本"""
    papers: Tuple[Paper, ...]
    workspaces: Tuple[Workspace, ...]


class EntityStore:
    """论文和工作区的内存权威集合

    所有修改都必须通过这里的方法进行。每次成功的修改都会在返回前
    把完整的论文集合和工作区集合同步写回持久化镜像，然后通知订阅者。
    修改不会跨越 await，因此多个异步任务的完成不会交错写入。
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        seed_papers: Callable[[], List[Paper]] = default_papers,
        seed_workspaces: Callable[[], List[Workspace]] = default_workspaces,
    ):
        self.storage = storage
        self._papers: List[Paper] = self._load(PAPERS_KEY, Paper.from_dict, seed_papers)
        self._workspaces: List[Workspace] = self._load(WORKSPACES_KEY, Workspace.from_dict, seed_workspaces)
        self._listeners: List[Callable[[StoreSnapshot], None]] = []

    def _load(self, key: str, factory: Callable[[Any], T], seed: Callable[[], List[T]]) -> List[T]:
        """从持久化镜像恢复集合，不存在或无法解析时使用默认数据"""
        raw = self.storage.get(key)
        if raw is None:
            return seed()

        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"持久化数据无法解析，使用默认数据: key={key} {e}")
            return seed()
        if not isinstance(items, list):
            logger.warning(f"持久化数据格式错误，使用默认数据: key={key}")
            return seed()

        result = []
        for item in items:
            try:
                result.append(factory(item))
            except (KeyError, TypeError, ValueError, OverflowError, AttributeError) as e:
                logger.warning(f"跳过无法恢复的记录: key={key} {e}")
        return result

    # ------------------------------------------------------------------
    # 读取
    # ------------------------------------------------------------------

    def list_papers(self) -> List[Paper]:
        """按加入时间倒序返回论文，最新的在最前"""
        return list(self._papers)

    def list_workspaces(self) -> List[Workspace]:
        return list(self._workspaces)

    def get_paper(self, paper_id: str) -> Optional[Paper]:
        return next((p for p in self._papers if p.id == paper_id), None)

    def get_workspace(self, workspace_id: str) -> Optional[Workspace]:
        return next((w for w in self._workspaces if w.id == workspace_id), None)

    def has_title(self, title: Optional[str]) -> bool:
        return any(p.title == title for p in self._papers)

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            papers=tuple(copy.deepcopy(self._papers)),
            workspaces=tuple(copy.deepcopy(self._workspaces)),
        )

    def subscribe(self, listener: Callable[[StoreSnapshot], None]) -> Callable[[], None]:
        """订阅修改通知，返回取消订阅的函数"""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # 修改
    # ------------------------------------------------------------------

    def add_paper(self, candidate: CandidateLike, analysis: Optional[AnalysisResult] = None) -> Optional[Paper]:
        """导入一篇论文

        标题完全相同的论文已存在时什么也不做，返回 None。

        Returns:
            Optional[Paper]: 新建的论文
        """
        title = candidate_title(candidate)
        if title is None:
            logger.warning("候选论文没有标题，忽略导入")
            return None
        if self.has_title(title):
            logger.debug(f"论文已存在，跳过导入: {title}")
            return None

        paper = materialize_paper(candidate, analysis)
        self._papers.insert(0, paper)
        logger.info(f"导入论文: {paper.id} {paper.title}")
        self._commit()
        return paper

    def add_workspace(
        self,
        name: str,
        description: str = "",
        paper_ids: Optional[List[str]] = None,
        color: str = "indigo",
    ) -> Workspace:
        if not name or not name.strip():
            raise ValidationError("Workspace name must not be empty.")

        workspace = Workspace(
            id=uuid.uuid4().hex,
            name=name.strip(),
            description=description,
            paper_ids=list(paper_ids or []),
            created_at=date.today().isoformat(),
            color=color,
        )
        self._workspaces.append(workspace)
        logger.info(f"新建工作区: {workspace.id} {workspace.name}")
        self._commit()
        return workspace

    def rename_workspace(self, workspace_id: str, name: str) -> Workspace:
        if not name or not name.strip():
            raise ValidationError("Workspace name must not be empty.")
        workspace = self._require_workspace(workspace_id)
        workspace.name = name.strip()
        self._commit()
        return workspace

    def delete_workspace(self, workspace_id: str) -> Workspace:
        workspace = self._require_workspace(workspace_id)
        self._workspaces.remove(workspace)
        logger.info(f"删除工作区: {workspace.id} {workspace.name}")
        self._commit()
        return workspace

    def add_paper_to_workspace(self, workspace_id: str, paper_id: str) -> Workspace:
        """把论文加入工作区，不检查论文是否存在"""
        workspace = self._require_workspace(workspace_id)
        if paper_id not in workspace.paper_ids:
            workspace.paper_ids.append(paper_id)
            self._commit()
        return workspace

    def _require_workspace(self, workspace_id: str) -> Workspace:
        workspace = self.get_workspace(workspace_id)
        if workspace is None:
            raise NotFoundError(f"Workspace not found: {workspace_id}")
        return workspace

    def _commit(self):
        """把完整集合写回持久化镜像并通知订阅者"""
        self.storage.set(PAPERS_KEY, json.dumps([p.to_dict() for p in self._papers], ensure_ascii=False))
        self.storage.set(WORKSPACES_KEY, json.dumps([w.to_dict() for w in self._workspaces], ensure_ascii=False))

        if self._listeners:
            snapshot = self.snapshot()
            for listener in list(self._listeners):
                listener(snapshot)
