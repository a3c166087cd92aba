import mimetypes
import os
import re
from typing import Optional

from research_hub.core.operators.base import Operator
from research_hub.core.models import AnalysisResult, UploadedDocument
from research_hub.core.common import logger, extract_json_object
from research_hub.core.errors import UnsupportedDocumentError
from research_hub.core.llm import LLMClient

PDF_CONTENT_TYPE = "application/pdf"
UNTITLED_DOCUMENT = "Untitled Document"


def validate_document(document: UploadedDocument):
    """只接受PDF，其他格式在调用AI之前就被拒绝

    有 content_type 时以它为准，否则根据文件名猜测。

    Raises:
        UnsupportedDocumentError: 不是PDF
    """
    content_type = document.content_type or mimetypes.guess_type(document.filename)[0]
    if content_type != PDF_CONTENT_TYPE:
        raise UnsupportedDocumentError(document.filename)


def derive_title(filename: str) -> str:
    """由文件名生成可读标题

    去掉扩展名，按连字符和下划线切分，每个单词首字母大写：
    my-cool-paper.pdf -> My Cool Paper
    """
    stem = os.path.splitext(os.path.basename(filename))[0]
    words = [w.strip() for w in re.split(r"[-_]", stem) if w.strip()]
    title = " ".join(w[:1].upper() + w[1:] for w in words)
    # 只有空白或分隔符的文件名没有可用的标题
    return title or UNTITLED_DOCUMENT


def build_summary_prompt(title: str) -> str:
    return (
        f'Provide a detailed, professional academic summary for a paper titled: "{title}".\n'
        "Use your internal knowledge and search to find real information if it exists.\n\n"
        "Return a JSON object with:\n"
        "- keyFindings: Array of strings\n"
        "- methodology: String\n"
        "- limitations: Array of strings\n"
        "- futureWork: String\n"
        "- significanceScore: Number (1-100)\n"
        "- executiveSummary: String (professional abstract)\n\n"
        "Return ONLY the JSON."
    )


class DocumentSummarizer(Operator):
    """为上传的文档生成结构化分析的算子

    目前只把标题发送给模型，文件内容不会被上传。
    """

    def __init__(self, client: LLMClient):
        self.client = client

    async def process(self, title: str) -> Optional[AnalysisResult]:
        """生成结构化分析

        Returns:
            Optional[AnalysisResult]: 调用或解析失败时返回 None
        """
        logger.info(f"开始生成文档分析: {title}")
        try:
            text = await self.client.generate(build_summary_prompt(title), web_search=True)
        except Exception as e:
            logger.error(f"文档分析失败 {title}: {str(e)}")
            return None

        data = extract_json_object(text)
        if data is None:
            logger.warning(f"文档分析结果中没有找到JSON对象: {title}")
            return None
        return AnalysisResult.from_dict(data)
