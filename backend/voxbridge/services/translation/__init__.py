"""
Translation Services
翻译服务模块

包含:
- phrase_table.py / phrasebook.py: 双语短语表
- lexical.py: 词表翻译器
- scorer.py: 质量评分
- cache.py: 翻译缓存
- adapters/: 翻译策略
- engine.py: 翻译决策引擎
- factory.py: 引擎组装
"""

from voxbridge.services.translation.cache import CacheKey, TranslationCache
from voxbridge.services.translation.engine import (
    TranslationEngine,
    TranslationOutcome,
    TranslationStats,
)
from voxbridge.services.translation.factory import (
    build_default_adapters,
    build_translation_engine,
)
from voxbridge.services.translation.lexical import LexicalResolver
from voxbridge.services.translation.phrase_table import PhraseTable, build_default_phrase_table
from voxbridge.services.translation.scorer import QualityScorer, ScoringWeights

__all__ = [
    "CacheKey",
    "TranslationCache",
    "TranslationEngine",
    "TranslationOutcome",
    "TranslationStats",
    "build_default_adapters",
    "build_translation_engine",
    "LexicalResolver",
    "PhraseTable",
    "build_default_phrase_table",
    "QualityScorer",
    "ScoringWeights",
]
