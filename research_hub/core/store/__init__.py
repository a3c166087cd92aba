from research_hub.core.store.entity_store import EntityStore, StoreSnapshot, PAPERS_KEY, WORKSPACES_KEY
from research_hub.core.store.importer import materialize_paper, new_paper_id
from research_hub.core.store.preferences import UserPreferences
from research_hub.core.store.seed import default_papers, default_workspaces

__all__ = [
    "EntityStore",
    "StoreSnapshot",
    "PAPERS_KEY",
    "WORKSPACES_KEY",
    "materialize_paper",
    "new_paper_id",
    "UserPreferences",
    "default_papers",
    "default_workspaces",
]
