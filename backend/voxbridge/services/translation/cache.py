"""
Translation Cache
翻译缓存 - 有界键值存储，按插入顺序淘汰最旧条目
"""

from __future__ import annotations

from collections import OrderedDict
from typing import NamedTuple

from voxbridge.utils.text import normalize_text


class CacheKey(NamedTuple):
    """缓存键: (源语言, 目标语言, 规范化文本)"""

    source_lang: str
    target_lang: str
    text: str

    @classmethod
    def build(cls, text: str, source_lang: str, target_lang: str) -> CacheKey:
        return cls(source_lang, target_lang, normalize_text(text))


class TranslationCache:
    """
    有界翻译缓存

    容量满时淘汰最早插入的条目；覆盖已有键不改变其位置，也不触发淘汰。
    不做持久化，也不保证并发读写的原子性。
    """

    DEFAULT_CAPACITY = 1000

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._entries: OrderedDict[CacheKey, str] = OrderedDict()

    def get(self, key: CacheKey) -> str | None:
        return self._entries.get(key)

    def put(self, key: CacheKey, value: str) -> None:
        if key in self._entries:
            self._entries[key] = value
            return
        while len(self._entries) >= self.capacity:
            self._entries.popitem(last=False)
        self._entries[key] = value

    def clear(self) -> None:
        self._entries.clear()

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
