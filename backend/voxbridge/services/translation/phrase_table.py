"""
Phrase Table
双语短语表 - 按语言对划分的有序短语映射

由调用方显式构造并传入 LexicalResolver，不存在进程级可变单例。
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from voxbridge.utils.text import normalize_text


def pair_key(source_lang: str, target_lang: str) -> str:
    """语言对键，如 en-ar"""
    return f"{source_lang}-{target_lang}"


def _normalized(mapping: Mapping[str, str]) -> dict[str, str]:
    # 规范化键，保留插入顺序；重复键以后者为准
    result: dict[str, str] = {}
    for phrase, translation in mapping.items():
        key = normalize_text(phrase)
        if key:
            result[key] = translation
    return result


@dataclass(frozen=True)
class PhraseTable:
    """
    短语表

    Attributes:
        pairs: 语言对 -> 有序短语映射（顺序即查找优先级）
        common: 语言对 -> 常用词补充表（逐词拆解的最后一级回退）
    """

    pairs: dict[str, dict[str, str]] = field(default_factory=dict)
    common: dict[str, dict[str, str]] = field(default_factory=dict)

    @classmethod
    def from_mapping(
        cls,
        pairs: Mapping[str, Mapping[str, str]],
        common: Mapping[str, Mapping[str, str]] | None = None,
    ) -> PhraseTable:
        """从普通字典构造，键统一规范化"""
        return cls(
            pairs={pair: _normalized(phrases) for pair, phrases in pairs.items()},
            common={pair: _normalized(words) for pair, words in (common or {}).items()},
        )

    def has_pair(self, source_lang: str, target_lang: str) -> bool:
        return pair_key(source_lang, target_lang) in self.pairs

    def phrases(self, source_lang: str, target_lang: str) -> dict[str, str]:
        """获取语言对的短语映射（未知语言对返回空字典）"""
        return self.pairs.get(pair_key(source_lang, target_lang), {})

    def common_words(self, source_lang: str, target_lang: str) -> dict[str, str]:
        return self.common.get(pair_key(source_lang, target_lang), {})

    def lookup(self, phrase: str, source_lang: str, target_lang: str) -> str | None:
        return self.phrases(source_lang, target_lang).get(phrase)

    def single_word_keys(self, source_lang: str, target_lang: str) -> set[str]:
        """语言对中所有单词条目的键"""
        return {p for p in self.phrases(source_lang, target_lang) if " " not in p}

    def phrases_longest_first(self, source_lang: str, target_lang: str) -> list[tuple[str, str]]:
        """按词数降序排列的短语（同词数保持表内顺序）"""
        items = list(self.phrases(source_lang, target_lang).items())
        return sorted(items, key=lambda item: len(item[0].split()), reverse=True)

    def with_reverse(self, source_lang: str, target_lang: str) -> PhraseTable:
        """返回追加了反向语言对的新表"""
        forward = self.phrases(source_lang, target_lang)
        reverse = _normalized({target: source for source, target in forward.items()})
        pairs = dict(self.pairs)
        pairs[pair_key(target_lang, source_lang)] = reverse
        return PhraseTable(pairs=pairs, common=dict(self.common))

    def __len__(self) -> int:
        return sum(len(phrases) for phrases in self.pairs.values())


def build_default_phrase_table() -> PhraseTable:
    """内置英阿短语表（含反向 ar-en）"""
    from voxbridge.services.translation.phrasebook import EN_AR_COMMON_WORDS, EN_AR_PHRASES

    table = PhraseTable.from_mapping(
        {"en-ar": EN_AR_PHRASES},
        common={"en-ar": EN_AR_COMMON_WORDS},
    )
    return table.with_reverse("en", "ar")
