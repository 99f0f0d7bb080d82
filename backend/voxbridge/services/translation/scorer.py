"""
Quality Scorer
翻译质量评分 - 启发式打分，结果落在 [0, 1]
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields

from voxbridge.core.exceptions import InvalidConfigError
from voxbridge.core.languages import matches_script
from voxbridge.services.translation.phrase_table import PhraseTable

UNRESOLVED_MARKER = re.compile(r"\[[^\]]*\]")
ERROR_TOKENS = ("ERROR", "FAILED")


@dataclass(frozen=True)
class ScoringWeights:
    """评分权重（经验常数，可通过配置覆盖）"""

    base: float = 0.5
    length: float = 0.2
    coverage: float = 0.3
    error_penalty: float = 0.3
    script_bonus: float = 0.2
    bracket_density: float = 0.3
    no_table_coverage: float = 0.5  # 语言对无词表时的中性覆盖率

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                raise InvalidConfigError(f"score weight {f.name}", value, "must be non-negative")

    @classmethod
    def from_settings(cls, settings) -> ScoringWeights:
        return cls(
            base=settings.SCORE_BASE,
            length=settings.SCORE_LENGTH_WEIGHT,
            coverage=settings.SCORE_COVERAGE_WEIGHT,
            error_penalty=settings.SCORE_ERROR_PENALTY,
            script_bonus=settings.SCORE_SCRIPT_BONUS,
            bracket_density=settings.SCORE_BRACKET_DENSITY_WEIGHT,
        )


class QualityScorer:
    """翻译质量评分器（纯函数，确定性）"""

    def __init__(self, table: PhraseTable, weights: ScoringWeights | None = None):
        self.table = table
        self.weights = weights or ScoringWeights()

    def score(self, original: str, candidate: str, source_lang: str, target_lang: str) -> float:
        """为候选译文打分"""
        if not candidate or not candidate.strip():
            return 0.0

        w = self.weights
        quality = w.base

        # 1. 长度相近
        quality += w.length * self.length_ratio(original, candidate)

        # 2. 词表覆盖率
        quality += w.coverage * self.dictionary_coverage(original, source_lang, target_lang)

        # 3. 明显错误
        unresolved = len(UNRESOLVED_MARKER.findall(candidate))
        has_error_token = any(token in candidate for token in ERROR_TOKENS)
        if unresolved or has_error_token or candidate.strip().lower() == original.strip().lower():
            quality -= w.error_penalty

        # 4. 书写系统匹配
        if matches_script(candidate, target_lang):
            quality += w.script_bonus

        # 5. 未解析词密度
        if unresolved:
            word_count = max(1, len(original.split()))
            quality -= w.bracket_density * unresolved / word_count

        return max(0.0, min(1.0, quality))

    @staticmethod
    def length_ratio(original: str, candidate: str) -> float:
        longest = max(len(original), len(candidate))
        if longest == 0:
            return 0.0
        return min(len(original), len(candidate)) / longest

    def dictionary_coverage(self, original: str, source_lang: str, target_lang: str) -> float:
        """原文中出现在词表单词条目里的词所占比例"""
        if not self.table.has_pair(source_lang, target_lang):
            return self.weights.no_table_coverage

        words = original.lower().split()
        if not words:
            return 0.0
        keys = self.table.single_word_keys(source_lang, target_lang)
        return sum(1 for word in words if word in keys) / len(words)
