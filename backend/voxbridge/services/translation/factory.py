"""
Translation Engine Factory
引擎工厂 - 根据配置组装词表、评分器、缓存与翻译策略
"""

from __future__ import annotations

import httpx
from loguru import logger

from voxbridge.core.config import Settings, get_settings

from .adapters import (
    GoogleFreeAdapter,
    LexicalAdapter,
    LibreTranslateAdapter,
    MicrosoftTranslatorAdapter,
    MyMemoryAdapter,
    StrategyAdapter,
)
from .cache import TranslationCache
from .engine import TranslationEngine
from .lexical import LexicalResolver
from .phrase_table import PhraseTable, build_default_phrase_table
from .scorer import QualityScorer, ScoringWeights


def build_default_adapters(
    settings: Settings,
    phrase_table: PhraseTable,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[StrategyAdapter]:
    """
    按优先级构造翻译策略列表

    远端服务在前（启用时），词表策略始终放在最后。
    """
    timeout = settings.TRANSLATION_ADAPTER_TIMEOUT
    adapters: list[StrategyAdapter] = []

    if settings.REMOTE_TRANSLATION_ENABLED:
        adapters.extend(
            [
                LibreTranslateAdapter(settings.LIBRETRANSLATE_URL, timeout, transport),
                MyMemoryAdapter(settings.MYMEMORY_URL, timeout, transport),
                GoogleFreeAdapter(settings.GOOGLE_TRANSLATE_URL, timeout, transport),
            ]
        )
        if settings.MICROSOFT_TRANSLATOR_KEY:
            adapters.append(
                MicrosoftTranslatorAdapter(
                    settings.MICROSOFT_TRANSLATOR_URL,
                    api_key=settings.MICROSOFT_TRANSLATOR_KEY,
                    timeout=timeout,
                    transport=transport,
                )
            )

    adapters.append(LexicalAdapter(LexicalResolver(phrase_table), timeout=timeout))
    return adapters


def build_translation_engine(
    settings: Settings | None = None,
    phrase_table: PhraseTable | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> TranslationEngine:
    """创建翻译引擎实例"""
    settings = settings or get_settings()
    if phrase_table is None:
        phrase_table = build_default_phrase_table()

    adapters = build_default_adapters(settings, phrase_table, transport)
    logger.info(f"Translation adapters: {[adapter.name for adapter in adapters]}")

    return TranslationEngine(
        adapters=adapters,
        scorer=QualityScorer(phrase_table, ScoringWeights.from_settings(settings)),
        cache=TranslationCache(settings.TRANSLATION_CACHE_SIZE),
    )
