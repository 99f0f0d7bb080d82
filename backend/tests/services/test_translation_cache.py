"""
Tests for TranslationCache
翻译缓存测试
"""

import pytest

from voxbridge.services.translation import CacheKey, TranslationCache


def key(i: int) -> CacheKey:
    return CacheKey.build(f"text {i}", "en", "ar")


class TestCacheKey:
    """缓存键规范化"""

    def test_normalized_text(self):
        assert CacheKey.build("  Hello   World ", "en", "ar") == CacheKey.build("hello world", "en", "ar")

    def test_language_pair_is_part_of_key(self):
        assert CacheKey.build("hello", "en", "ar") != CacheKey.build("hello", "en", "fr")


class TestTranslationCache:
    """有界缓存"""

    def test_get_missing_returns_none(self):
        assert TranslationCache(3).get(key(1)) is None

    def test_put_and_get(self):
        cache = TranslationCache(3)
        cache.put(key(1), "one")
        assert cache.get(key(1)) == "one"
        assert key(1) in cache

    def test_capacity_plus_one_evicts_oldest(self):
        capacity = 10
        cache = TranslationCache(capacity)
        for i in range(capacity + 1):
            cache.put(key(i), f"value {i}")

        assert cache.size() == capacity
        assert cache.get(key(0)) is None
        assert cache.get(key(capacity)) == f"value {capacity}"

    def test_overwrite_does_not_evict(self):
        cache = TranslationCache(2)
        cache.put(key(1), "a")
        cache.put(key(2), "b")
        cache.put(key(1), "c")

        assert len(cache) == 2
        assert cache.get(key(1)) == "c"

        # key(1) 保持原插入位置，仍是最旧条目
        cache.put(key(3), "d")
        assert cache.get(key(1)) is None
        assert cache.get(key(2)) == "b"

    def test_clear(self):
        cache = TranslationCache(3)
        cache.put(key(1), "one")
        cache.clear()
        assert cache.size() == 0

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            TranslationCache(0)
