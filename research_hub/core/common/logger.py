from loguru import logger
from typing import Optional
import sys
import os

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

_DEFAULT_LOG_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))),
    "logs",
)


def setup_logger(level: Optional[str] = None, log_dir: Optional[str] = None):
    """配置日志记录器

    控制台输出默认 INFO 级别，文件输出固定 DEBUG 级别、按天轮转、保留30天。
    级别和目录可以通过参数或环境变量 RESEARCH_HUB_LOG_LEVEL / RESEARCH_HUB_LOG_DIR 覆盖。
    log_dir 为空字符串时不写文件。
    """
    level = level or os.environ.get("RESEARCH_HUB_LOG_LEVEL", "INFO")
    if log_dir is None:
        log_dir = os.environ.get("RESEARCH_HUB_LOG_DIR", _DEFAULT_LOG_DIR)

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if not log_dir:
        return
    os.makedirs(log_dir, exist_ok=True)
    logger.add(
        os.path.join(log_dir, "research_hub_{time:YYYY-MM-DD}.log"),
        rotation="00:00",
        retention="30 days",
        format=FILE_FORMAT,
        level="DEBUG",
        encoding="utf-8",
    )


setup_logger()

__all__ = ['logger', 'setup_logger']
