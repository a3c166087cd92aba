from typing import Optional
from .base import YamlConfig


class OrchestratorConfig(YamlConfig):
    """各个AI任务槽位的超时设置（秒），None 表示不设超时"""

    search_timeout: Optional[float] = 60.0
    summarize_timeout: Optional[float] = 90.0
    lab_timeout: Optional[float] = 300.0
    chat_timeout: Optional[float] = 60.0
    search_result_count: int = 5
