"""
Remote Translation Adapters
远端翻译服务适配器 (httpx)

- LibreTranslate: POST JSON
- MyMemory: GET
- Google (gtx 免费接口): GET
- Microsoft Translator: POST，需要订阅密钥
"""

from __future__ import annotations

from typing import Any

import httpx

from voxbridge.core.exceptions import AdapterError

from .base import MethodTag, StrategyAdapter


class RemoteAdapter(StrategyAdapter):
    """基于 HTTP 的远端翻译适配器"""

    method = MethodTag.REMOTE

    def __init__(
        self,
        url: str,
        timeout: float = 8.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(timeout=timeout)
        self.url = url
        # 测试时可注入 httpx.MockTransport
        self.transport = transport

    async def _request(self, method: str, **kwargs) -> Any:
        """发送请求并解析 JSON，非 2xx 或非 JSON 视为失败"""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.request(method, self.url, **kwargs)

        if resp.status_code < 200 or resp.status_code >= 300:
            raise AdapterError(self.name, f"HTTP {resp.status_code}")

        try:
            return resp.json()
        except ValueError as e:
            raise AdapterError(self.name, "malformed response") from e


class LibreTranslateAdapter(RemoteAdapter):
    name = "libretranslate"

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str | None:
        data = await self._request(
            "POST",
            json={"q": text, "source": source_lang, "target": target_lang, "format": "text"},
            headers={"Content-Type": "application/json"},
        )
        if not isinstance(data, dict):
            return None
        return data.get("translatedText")


class MyMemoryAdapter(RemoteAdapter):
    name = "mymemory"

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str | None:
        data = await self._request(
            "GET",
            params={"q": text, "langpair": f"{source_lang}|{target_lang}"},
        )
        if not isinstance(data, dict):
            return None
        response_data = data.get("responseData") or {}
        return response_data.get("translatedText")


class GoogleFreeAdapter(RemoteAdapter):
    name = "google"

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str | None:
        data = await self._request(
            "GET",
            params={"client": "gtx", "sl": source_lang, "tl": target_lang, "dt": "t", "q": text},
        )
        # 响应形如 [[["译文", "原文", ...], ...], ...]
        try:
            return data[0][0][0]
        except (IndexError, KeyError, TypeError):
            return None


class MicrosoftTranslatorAdapter(RemoteAdapter):
    name = "microsoft"

    def __init__(
        self,
        url: str,
        api_key: str = "",
        timeout: float = 8.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(url, timeout=timeout, transport=transport)
        self.api_key = api_key

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str | None:
        if not self.api_key:
            return None

        data = await self._request(
            "POST",
            params={"api-version": "3.0", "from": source_lang, "to": target_lang},
            json=[{"text": text}],
            headers={
                "Content-Type": "application/json",
                "Ocp-Apim-Subscription-Key": self.api_key,
            },
        )
        try:
            return data[0]["translations"][0]["text"]
        except (IndexError, KeyError, TypeError):
            return None
