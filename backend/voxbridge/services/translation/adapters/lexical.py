"""
Lexical Adapter
词表翻译策略 - 包装 LexicalResolver
"""

from __future__ import annotations

from voxbridge.services.translation.lexical import LexicalResolver

from .base import MethodTag, StrategyAdapter


class LexicalAdapter(StrategyAdapter):
    name = "dictionary"
    method = MethodTag.LEXICAL

    def __init__(self, resolver: LexicalResolver, timeout: float = 8.0):
        super().__init__(timeout=timeout)
        self.resolver = resolver

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str | None:
        return self.resolver.resolve(text, source_lang, target_lang)
