from typing import List

from research_hub.core.operators.base import Operator
from research_hub.core.models import PaperCandidate
from research_hub.core.common import logger, extract_json_array
from research_hub.core.llm import LLMClient


def build_search_prompt(query: str, result_count: int) -> str:
    return (
        f'Search for high-quality academic research papers related to: "{query}".\n'
        f"Provide exactly {result_count} real papers.\n"
        "Return the results strictly as a JSON array of objects.\n"
        "Each object must have: title, authors (array of strings), year (number), "
        "abstract (string), journal (string), citations (number), url (string), "
        "and tags (array of strings).\n\n"
        "Return ONLY the JSON array inside markdown code blocks."
    )


class DiscoverySearch(Operator):
    """通过联网搜索发现论文的算子"""

    def __init__(self, client: LLMClient, result_count: int = 5):
        self.client = client
        self.result_count = result_count

    async def process(self, query: str) -> List[PaperCandidate]:
        """搜索与 query 相关的论文

        模型返回的文本中可能夹杂说明文字，只取第一个合法的JSON数组。
        调用失败或解析失败都返回空列表。

        Returns:
            List[PaperCandidate]: 候选论文列表
        """
        logger.info(f"开始搜索论文: {query}")
        try:
            text = await self.client.generate(
                build_search_prompt(query, self.result_count), web_search=True
            )
        except Exception as e:
            logger.error(f"论文搜索失败: {str(e)}")
            return []

        items = extract_json_array(text)
        if items is None:
            logger.warning(f"搜索结果中没有找到JSON数组: {(text or '')[:200]!r}")
            return []

        candidates = [PaperCandidate.from_dict(item) for item in items if isinstance(item, dict)]
        logger.info(f"搜索完成: {len(candidates)} 篇候选论文")
        return candidates

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(result_count={self.result_count})"
