import json
from typing import Any, List, Optional, Type

_decoder = json.JSONDecoder()

# 每段输出最多尝试解析的起始位置数量
MAX_DECODE_ATTEMPTS = 64


def _extract_first(
    text: Optional[str],
    opener: str,
    expected: Type,
    max_attempts: int = MAX_DECODE_ATTEMPTS,
) -> Optional[Any]:
    """从模型输出中提取第一个可以完整解析的JSON片段

    模型输出可能包含 markdown 代码块、说明文字或多余的内容，
    因此从每个 opener 出现的位置尝试 raw_decode，返回第一个类型符合的结果。
    每次尝试都要从该位置重新扫描，尝试次数超过 max_attempts 后放弃。

    Args:
        text: 模型返回的原始文本
        opener: 起始字符，'[' 或 '{'
        expected: 期望的解析结果类型
        max_attempts: 最多尝试的起始位置数量

    Returns:
        解析结果，找不到时返回 None
    """
    if not text:
        return None

    pos = text.find(opener)
    attempts = 0
    while pos != -1 and attempts < max_attempts:
        attempts += 1
        try:
            value, _ = _decoder.raw_decode(text, pos)
        except (json.JSONDecodeError, RecursionError):
            pass
        else:
            if isinstance(value, expected):
                return value
        pos = text.find(opener, pos + 1)
    return None


def extract_json_array(text: Optional[str], max_attempts: int = MAX_DECODE_ATTEMPTS) -> Optional[List[Any]]:
    """提取第一个合法的JSON数组"""
    return _extract_first(text, "[", list, max_attempts)


def extract_json_object(text: Optional[str], max_attempts: int = MAX_DECODE_ATTEMPTS) -> Optional[dict]:
    """提取第一个合法的JSON对象"""
    return _extract_first(text, "{", dict, max_attempts)
