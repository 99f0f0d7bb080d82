"""
Text Utilities
文本规范化工具 - 缓存键、词表查找与翻译前后处理共用
"""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")
_DOUBLE_QUOTES = re.compile(r"[“”„‟«»]")
_SINGLE_QUOTES = re.compile(r"[‘’‚‛′`]")


def normalize_quotes(text: str) -> str:
    """将弯引号/撇号统一为 ASCII 形式"""
    text = _DOUBLE_QUOTES.sub('"', text)
    return _SINGLE_QUOTES.sub("'", text)


def collapse_whitespace(text: str) -> str:
    """去除首尾空白并合并连续空白"""
    return _WHITESPACE.sub(" ", text).strip()


def normalize_text(text: str) -> str:
    """规范化: 引号 + 空白 + 小写"""
    if not text:
        return ""
    return collapse_whitespace(normalize_quotes(text)).lower()


def preprocess_text(text: str) -> str:
    """翻译前预处理（交给各翻译策略的文本）"""
    return normalize_text(text)


def postprocess_text(text: str) -> str:
    """翻译后处理: 去除首尾空白，首字母大写"""
    text = text.strip()
    if text and text[0].isalpha():
        return text[0].upper() + text[1:]
    return text
