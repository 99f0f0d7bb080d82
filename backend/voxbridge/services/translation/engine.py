"""
Translation Resolution Engine
翻译决策引擎 - 缓存 + 多策略并行 + 质量评分择优

流程:
1. 空文本直接返回空串
2. 命中缓存直接返回（不调用任何策略）
3. 预处理文本，并行调用全部策略，收集候选
4. 无候选时返回降级哨兵字符串
5. 评分择优 -> 后处理 -> 写缓存 -> 返回
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace

from loguru import logger

from voxbridge.core.exceptions import NoCandidatesAvailableError, UnsupportedLanguageError
from voxbridge.core.languages import get_supported_languages, is_supported
from voxbridge.services.translation.adapters import (
    MethodTag,
    StrategyAdapter,
    TranslationCandidate,
)
from voxbridge.services.translation.cache import CacheKey, TranslationCache
from voxbridge.services.translation.scorer import QualityScorer
from voxbridge.utils.text import collapse_whitespace, postprocess_text, preprocess_text


@dataclass
class TranslationOutcome:
    """一次翻译请求的结果"""

    text: str
    method: MethodTag | None = None
    adapter: str | None = None
    quality_score: float = 0.0
    cached: bool = False
    warning: str | None = None


@dataclass
class TranslationStats:
    """翻译统计"""

    total_translations: int = 0
    cache_hits: int = 0
    api_calls: int = 0
    dictionary_fallbacks: int = 0
    deduplicated: int = 0

    def to_dict(self, cache_size: int) -> dict:
        rate = self.cache_hits / self.total_translations * 100 if self.total_translations else 0.0
        return {
            "totalTranslations": self.total_translations,
            "cacheHits": self.cache_hits,
            "apiCalls": self.api_calls,
            "dictionaryFallbacks": self.dictionary_fallbacks,
            "deduplicated": self.deduplicated,
            "cacheHitRate": f"{rate:.1f}%",
            "cacheSize": cache_size,
        }


class TranslationEngine:
    """
    翻译决策引擎

    进程级共享对象。缓存只是性能优化；并发的相同请求通过 in-flight 表合并为一次扇出。

    Attributes:
        adapters: 按优先级排列的翻译策略（远端在前，词表在后）
        scorer: 质量评分器
        cache: 翻译缓存
    """

    UNAVAILABLE_TEMPLATE = "[Translation unavailable: {text}]"
    ERROR_TEMPLATE = "[Translation error: {text}]"

    def __init__(
        self,
        adapters: list[StrategyAdapter],
        scorer: QualityScorer,
        cache: TranslationCache | None = None,
    ):
        self.adapters = list(adapters)
        self.scorer = scorer
        self.cache = cache if cache is not None else TranslationCache()
        self.stats = TranslationStats()
        self._inflight: dict[CacheKey, asyncio.Task] = {}

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """翻译文本，始终返回可展示的字符串"""
        outcome = await self.resolve(text, source_lang, target_lang)
        return outcome.text

    async def resolve(self, text: str, source_lang: str, target_lang: str) -> TranslationOutcome:
        """翻译文本，返回带来源与评分信息的结果"""
        if not text or not text.strip():
            return TranslationOutcome(text="")

        self.stats.total_translations += 1
        warning = self._check_languages(source_lang, target_lang)

        key = CacheKey.build(text, source_lang, target_lang)
        cached = self.cache.get(key)
        if cached is not None:
            self.stats.cache_hits += 1
            logger.debug(f'Cache hit: "{cached}"')
            return TranslationOutcome(text=cached, cached=True, warning=warning)

        task = self._inflight.get(key)
        if task is not None:
            self.stats.deduplicated += 1
        else:
            task = asyncio.ensure_future(self._resolve_uncached(text, source_lang, target_lang, key))
            self._inflight[key] = task
            task.add_done_callback(lambda _, k=key: self._inflight.pop(k, None))

        # 调用方取消不应取消共享的扇出任务
        outcome = await asyncio.shield(task)
        return replace(outcome, warning=warning)

    async def _resolve_uncached(
        self, text: str, source_lang: str, target_lang: str, key: CacheKey
    ) -> TranslationOutcome:
        original = collapse_whitespace(text)
        logger.info(f'Translating: "{original}" ({source_lang} -> {target_lang})')

        try:
            processed = preprocess_text(text)
            candidates = await self._collect_candidates(processed, source_lang, target_lang)

            if not candidates:
                err = NoCandidatesAvailableError(original)
                logger.warning(f"All translation methods failed: {err.message}")
                return TranslationOutcome(text=self.UNAVAILABLE_TEMPLATE.format(text=original))

            best = self._select_best(original, candidates, source_lang, target_lang)
            final = postprocess_text(best.text)
            self.cache.put(key, final)

            logger.info(
                f'Best translation via {best.adapter} '
                f'(quality: {best.quality_score:.0%}): "{final}"'
            )
            return TranslationOutcome(
                text=final,
                method=best.method,
                adapter=best.adapter,
                quality_score=best.quality_score,
            )
        except Exception as e:
            logger.exception(f"Translation error: {e}")
            return TranslationOutcome(text=self.ERROR_TEMPLATE.format(text=original))

    async def _collect_candidates(
        self, text: str, source_lang: str, target_lang: str
    ) -> list[TranslationCandidate]:
        """并行调用全部策略，按优先级顺序收集非空候选"""
        results = await asyncio.gather(
            *(self._run_adapter(adapter, text, source_lang, target_lang) for adapter in self.adapters)
        )

        candidates = [candidate for candidate in results if candidate is not None]
        for candidate in candidates:
            if candidate.method == MethodTag.REMOTE:
                self.stats.api_calls += 1
            else:
                self.stats.dictionary_fallbacks += 1
        return candidates

    @staticmethod
    async def _run_adapter(
        adapter: StrategyAdapter, text: str, source_lang: str, target_lang: str
    ) -> TranslationCandidate | None:
        try:
            return await asyncio.wait_for(
                adapter.attempt(text, source_lang, target_lang),
                timeout=adapter.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Translation adapter timeout: {adapter.name} ({adapter.timeout}s)")
            return None
        except Exception as e:
            logger.warning(f"Translation adapter {adapter.name} failed: {e}")
            return None

    def _select_best(
        self,
        original: str,
        candidates: list[TranslationCandidate],
        source_lang: str,
        target_lang: str,
    ) -> TranslationCandidate:
        """评分并选出最高分候选（同分保留优先级更高者）"""
        best: TranslationCandidate | None = None
        for candidate in candidates:
            candidate.quality_score = self.scorer.score(
                original, candidate.text, source_lang, target_lang
            )
            logger.debug(
                f"Candidate from {candidate.adapter}: {candidate.quality_score:.2f} "
                f'"{candidate.text}"'
            )
            if best is None or candidate.quality_score > best.quality_score:
                best = candidate
        return best

    @staticmethod
    def _check_languages(source_lang: str, target_lang: str) -> str | None:
        """不支持的语言只记录警告，仍继续尝试各策略"""
        for code in (source_lang, target_lang):
            if not is_supported(code):
                err = UnsupportedLanguageError(code)
                logger.warning(err.message)
                return err.message
        return None

    def get_supported_languages(self) -> dict:
        return get_supported_languages()

    def get_stats(self) -> dict:
        return self.stats.to_dict(cache_size=self.cache.size())

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("Translation cache cleared")
