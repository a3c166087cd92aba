import pytest

from research_hub.core.errors import UnsupportedDocumentError, ValidationError
from research_hub.core.models import AnalysisResult, UploadedDocument
from research_hub.core.operators.processor import DocumentSummarizer, derive_title, validate_document
from conftest import FakeLLMClient


@pytest.mark.parametrize(
    "filename,expected",
    [
        ("my-cool-paper.pdf", "My Cool Paper"),
        ("deep_residual_learning.pdf", "Deep Residual Learning"),
        ("mixed-style_name.pdf", "Mixed Style Name"),
        ("alreadyCamel.pdf", "AlreadyCamel"),
        ("double--dash.pdf", "Double Dash"),
        ("/uploads/nested/file-name.pdf", "File Name"),
    ],
)
def test_derive_title(filename, expected):
    """测试由文件名生成标题"""
    assert derive_title(filename) == expected


def test_validate_document_accepts_pdf():
    """测试PDF通过校验"""
    validate_document(UploadedDocument("paper.pdf", "application/pdf"))
    validate_document(UploadedDocument("paper.pdf", None))


@pytest.mark.parametrize(
    "document",
    [
        UploadedDocument("notes.txt", "text/plain"),
        UploadedDocument("paper.pdf", "text/plain"),
        UploadedDocument("paper.docx", None),
        UploadedDocument("no_extension", None),
    ],
)
def test_validate_document_rejects_other_formats(document):
    """测试非PDF被拒绝，并带有面向用户的提示"""
    with pytest.raises(UnsupportedDocumentError) as exc_info:
        validate_document(document)
    assert isinstance(exc_info.value, ValidationError)
    assert str(exc_info.value) == "Please upload a PDF file."
    assert exc_info.value.filename == document.filename


@pytest.mark.asyncio
async def test_summarizer_parses_analysis():
    """测试解析结构化分析"""
    client = FakeLLMClient([
        'Here is the JSON: {"keyFindings": ["a", "b"], "methodology": "survey", '
        '"limitations": ["small sample"], "futureWork": "more data", '
        '"significanceScore": 150, "executiveSummary": "A study."}'
    ])

    analysis = await DocumentSummarizer(client).process("My Cool Paper")

    assert analysis == AnalysisResult(
        key_findings=["a", "b"],
        methodology="survey",
        limitations=["small sample"],
        future_work="more data",
        significance_score=100,
        executive_summary="A study.",
    )
    assert '"My Cool Paper"' in client.calls[0]["prompt"]


@pytest.mark.asyncio
async def test_summarizer_tolerates_partial_analysis():
    """测试字段缺失的分析结果"""
    analysis = await DocumentSummarizer(FakeLLMClient(['{"methodology": "x"}'])).process("T")
    assert analysis.methodology == "x"
    assert analysis.key_findings is None
    assert analysis.executive_summary is None


@pytest.mark.asyncio
@pytest.mark.parametrize("response", ["no json", TimeoutError("slow"), ""])
async def test_summarizer_failure_returns_none(response):
    """测试调用或解析失败时返回 None"""
    assert await DocumentSummarizer(FakeLLMClient([response])).process("T") is None


@pytest.mark.parametrize("filename", [" .pdf", "_ _.pdf", "--.pdf", "  my-paper .pdf"])
def test_derive_title_never_blank(filename):
    """测试只有空白或分隔符的文件名得到默认标题，单词两侧的空白被去掉"""
    title = derive_title(filename)
    assert title.strip() == title
    assert title in ("Untitled Document", "My Paper")
