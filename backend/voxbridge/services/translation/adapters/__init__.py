"""
Strategy Adapters Module
翻译策略模块 - 策略模式实现
"""

from .base import (
    ERROR_MARKERS,
    MethodTag,
    StrategyAdapter,
    TranslationCandidate,
    is_translation_error,
)
from .lexical import LexicalAdapter
from .remote import (
    GoogleFreeAdapter,
    LibreTranslateAdapter,
    MicrosoftTranslatorAdapter,
    MyMemoryAdapter,
    RemoteAdapter,
)

__all__ = [
    "ERROR_MARKERS",
    "MethodTag",
    "StrategyAdapter",
    "TranslationCandidate",
    "is_translation_error",
    "LexicalAdapter",
    "RemoteAdapter",
    "LibreTranslateAdapter",
    "MyMemoryAdapter",
    "GoogleFreeAdapter",
    "MicrosoftTranslatorAdapter",
]
