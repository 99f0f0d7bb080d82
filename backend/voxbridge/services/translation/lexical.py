"""
Lexical Resolver
词表翻译器 - 短语表 + 近似匹配 + 逐词拆解

查找顺序（先命中者胜出）:
1. 规范化输入
2. 整句精确匹配
3. 编辑距离近似匹配（相似度 >= 0.8）
4. 多词短语包含匹配
5. 逐词拆解（最长短语优先 -> 单词 -> 词形变化 -> 常用词 -> [原词]）
"""

from __future__ import annotations

import re

from loguru import logger

from voxbridge.services.translation.phrase_table import PhraseTable
from voxbridge.utils.text import normalize_text

_NON_WORD = re.compile(r"[^\w\s]")

# (后缀, 替换) - 先去后缀，再补后缀
_SUFFIX_RULES: list[tuple[str, str]] = [
    ("s", ""),
    ("es", ""),
    ("ies", "y"),
    ("ed", ""),
    ("ing", ""),
    ("er", ""),
    ("est", ""),
]
_ADDED_SUFFIXES = ("s", "ed", "ing")


def levenshtein(a: str, b: str) -> int:
    """字符级编辑距离"""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """相似度 (maxLen - editDistance) / maxLen"""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - levenshtein(a, b)) / longest


def word_variations(word: str) -> list[str]:
    """常见英文词形变化候选（复数、过去式、进行时、比较级）"""
    variations: list[str] = []
    for suffix, replacement in _SUFFIX_RULES:
        if word.endswith(suffix) and len(word) > len(suffix):
            variations.append(word[: -len(suffix)] + replacement)
    variations.extend(word + suffix for suffix in _ADDED_SUFFIXES)
    return [v for v in variations if v and v != word]


class LexicalResolver:
    """
    词表翻译器

    纯函数式: 结果只取决于传入的短语表，无副作用。

    Attributes:
        table: 短语表
        fuzzy_threshold: 近似匹配相似度阈值
        min_coverage: 逐词拆解的最低解析比例
        max_phrase_words: 拆解时尝试的最长短语词数
    """

    FUZZY_MIN_LENGTH = 3  # 只对长度大于此值的短语做近似匹配

    def __init__(
        self,
        table: PhraseTable,
        fuzzy_threshold: float = 0.8,
        min_coverage: float = 0.6,
        max_phrase_words: int = 5,
    ):
        self.table = table
        self.fuzzy_threshold = fuzzy_threshold
        self.min_coverage = min_coverage
        self.max_phrase_words = max_phrase_words

    def resolve(self, text: str, source_lang: str, target_lang: str) -> str | None:
        """翻译文本，无法翻译时返回 None"""
        if not self.table.has_pair(source_lang, target_lang):
            logger.debug(f"No phrase table for {source_lang}-{target_lang}")
            return None

        normalized = normalize_text(text)
        if not normalized:
            return None

        phrases = self.table.phrases(source_lang, target_lang)

        exact = phrases.get(normalized)
        if exact is not None:
            return exact

        fuzzy = self.fuzzy_match(normalized, source_lang, target_lang)
        if fuzzy is not None:
            return fuzzy

        contained = self.containment_match(normalized, source_lang, target_lang)
        if contained is not None:
            return contained

        return self.decompose(normalized, source_lang, target_lang)

    def fuzzy_match(self, normalized: str, source_lang: str, target_lang: str) -> str | None:
        """返回第一个相似度达到阈值的短语译文（表内顺序）"""
        for phrase, translation in self.table.phrases(source_lang, target_lang).items():
            if len(phrase) <= self.FUZZY_MIN_LENGTH:
                continue
            # 编辑距离不小于长度差，可提前排除
            longest = max(len(phrase), len(normalized))
            if (longest - abs(len(phrase) - len(normalized))) / longest < self.fuzzy_threshold:
                continue
            score = similarity(normalized, phrase)
            if score >= self.fuzzy_threshold:
                logger.debug(f'Fuzzy match: "{normalized}" ≈ "{phrase}" ({score:.0%})')
                return translation
        return None

    def containment_match(
        self, normalized: str, source_lang: str, target_lang: str
    ) -> str | None:
        """返回完整包含于输入中的多词短语译文（长短语优先，标点视为边界）"""
        for phrase, translation in self.table.phrases_longest_first(source_lang, target_lang):
            if " " in phrase and re.search(rf"(?<!\w){re.escape(phrase)}(?!\w)", normalized):
                return translation
        return None

    def decompose(self, normalized: str, source_lang: str, target_lang: str) -> str | None:
        """逐词拆解翻译，解析比例不足 min_coverage 时返回 None"""
        words = _NON_WORD.sub("", normalized).split()
        if not words:
            return None

        phrases = self.table.phrases(source_lang, target_lang)
        common = self.table.common_words(source_lang, target_lang)

        output: list[str] = []
        resolved = 0
        i = 0
        while i < len(words):
            # 最长短语优先
            span = 0
            for end in range(min(i + self.max_phrase_words, len(words)), i + 1, -1):
                candidate = " ".join(words[i:end])
                if candidate in phrases:
                    output.append(phrases[candidate])
                    span = end - i
                    break

            if span:
                resolved += span
                i += span
                continue

            translated = self._translate_word(words[i], phrases, common)
            if translated is None:
                output.append(f"[{words[i]}]")
            else:
                output.append(translated)
                resolved += 1
            i += 1

        if resolved / len(words) < self.min_coverage:
            return None

        result = " ".join(output)
        return result if result != normalized else None

    @staticmethod
    def _translate_word(word: str, phrases: dict[str, str], common: dict[str, str]) -> str | None:
        if word in phrases:
            return phrases[word]
        for variation in word_variations(word):
            if variation in phrases:
                return phrases[variation]
        return common.get(word)
