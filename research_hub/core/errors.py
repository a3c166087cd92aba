class ResearchHubError(Exception):
    """research_hub 的基础异常"""


class ValidationError(ResearchHubError, ValueError):
    """输入校验失败，在调用AI之前同步抛出，message 可直接展示给用户"""


class UnsupportedDocumentError(ValidationError):
    """上传的文件格式不被支持"""

    def __init__(self, filename: str, message: str = "Please upload a PDF file."):
        super().__init__(message)
        self.filename = filename


class NotFoundError(ResearchHubError, KeyError):
    """引用的实体不存在"""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
