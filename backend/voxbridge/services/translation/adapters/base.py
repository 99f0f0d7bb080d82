"""
Base Strategy Adapter
抽象基类 - 所有翻译策略的父类

核心约定:
1. attempt() 永不抛出异常，失败一律返回 None
2. 原样返回输入或包含错误标记的结果视为失败
3. 统一记录外部调用日志
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from voxbridge.core.exceptions import AdapterError
from voxbridge.core.logging import log_adapter_call

# 远端服务嵌入在正文里的错误标记
ERROR_MARKERS = (
    "MYMEMORY WARNING",
    "QUOTA EXCEEDED",
    "API LIMIT",
    "ERROR",
    "FAILED",
    "INVALID",
)


class MethodTag(str, Enum):
    """翻译方式"""

    REMOTE = "remote"
    LEXICAL = "lexical"


@dataclass
class TranslationCandidate:
    """单个策略给出的候选译文"""

    text: str
    method: MethodTag
    adapter: str
    quality_score: float = 0.0


def is_translation_error(text: str) -> bool:
    """判断结果中是否带有错误标记"""
    upper = text.upper()
    return any(marker in upper for marker in ERROR_MARKERS)


class StrategyAdapter(ABC):
    """
    翻译策略抽象基类

    子类只需实现 _translate()；异常、空结果与错误标记由基类统一转换为 None。
    """

    name: str = "adapter"
    method: MethodTag = MethodTag.REMOTE

    def __init__(self, timeout: float = 8.0):
        self.timeout = timeout

    async def attempt(
        self, text: str, source_lang: str, target_lang: str
    ) -> TranslationCandidate | None:
        """尝试翻译，失败返回 None"""
        start = time.perf_counter()
        error: str | None = None
        result: str | None = None

        try:
            result = await self._translate(text, source_lang, target_lang)
            if result is not None:
                result = result.strip()
            self._validate(text, result)
        except AdapterError as e:
            error = e.message
            result = None
        except Exception as e:
            error = f"{type(e).__name__}: {e}"
            result = None

        log_adapter_call(
            adapter=self.name,
            method=self.method.value,
            duration_ms=(time.perf_counter() - start) * 1000,
            success=result is not None,
            error=error,
        )

        if result is None:
            return None
        return TranslationCandidate(text=result, method=self.method, adapter=self.name)

    def _validate(self, text: str, result: str | None) -> None:
        if result is None:
            return
        if not result:
            raise AdapterError(self.name, "empty result")
        if result.lower() == text.strip().lower():
            raise AdapterError(self.name, "result equals input")
        if is_translation_error(result):
            raise AdapterError(self.name, "error marker in result", details=result[:100])

    @abstractmethod
    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str | None:
        """执行翻译，返回译文或 None"""
        pass
