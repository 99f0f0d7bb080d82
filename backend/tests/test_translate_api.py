"""
Translation API Tests
HTTP 接口测试
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from voxbridge.core.exception_handlers import register_exception_handlers
from voxbridge.core.exceptions import (
    AdapterError,
    MalformedMessageError,
    SessionNotFoundError,
    UnsupportedLanguageError,
    VoxBridgeError,
)


class TestTranslateEndpoint:
    @pytest.mark.asyncio
    async def test_translate_text(self, client):
        response = await client.post(
            "/api/v1/translate",
            json={"text": "Thank you", "sourceLang": "en", "targetLang": "ar"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["originalText"] == "Thank you"
        assert data["translatedText"] == "شكرا لك"
        assert data["sourceLang"] == "en"
        assert data["targetLang"] == "ar"
        assert data["method"] == "dictionary"
        assert data["cached"] is False
        assert "timestamp" in data

    @pytest.mark.asyncio
    async def test_second_request_is_cached(self, client):
        body = {"text": "good morning", "sourceLang": "en", "targetLang": "ar"}
        await client.post("/api/v1/translate", json=body)
        response = await client.post("/api/v1/translate", json=body)

        assert response.json()["cached"] is True

    @pytest.mark.asyncio
    async def test_degraded_result_for_unknown_pair(self, client):
        response = await client.post(
            "/api/v1/translate",
            json={"text": "hello", "sourceLang": "en", "targetLang": "xx"},
        )

        assert response.status_code == 200
        data = response.json()
        assert "hello" in data["translatedText"]
        assert "xx" in data["warning"]

    @pytest.mark.asyncio
    async def test_auto_detects_source_language(self, client):
        response = await client.post(
            "/api/v1/translate",
            json={"text": "مرحبا", "sourceLang": "auto", "targetLang": "en"},
        )

        assert response.status_code == 200
        assert response.json()["sourceLang"] == "ar"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"sourceLang": "en", "targetLang": "ar"},
            {"text": "", "sourceLang": "en", "targetLang": "ar"},
            {"text": "   ", "sourceLang": "en", "targetLang": "ar"},
            {"text": "hello", "targetLang": "ar"},
            {"text": "hello", "sourceLang": "en"},
        ],
    )
    async def test_missing_or_empty_fields_rejected(self, client, body):
        response = await client.post("/api/v1/translate", json=body)
        assert response.status_code == 422


class TestLanguagesAndStats:
    @pytest.mark.asyncio
    async def test_languages(self, client):
        response = await client.get("/api/v1/languages")

        assert response.status_code == 200
        data = response.json()
        assert data["ar"] == {"name": "Arabic", "flag": "🇸🇦"}
        assert len(data) == 12

    @pytest.mark.asyncio
    async def test_stats(self, client):
        await client.post(
            "/api/v1/translate",
            json={"text": "hello", "sourceLang": "en", "targetLang": "ar"},
        )
        response = await client.get("/api/v1/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["translation"]["totalTranslations"] == 1
        assert data["translation"]["dictionaryFallbacks"] == 1
        assert data["translation"]["cacheHitRate"] == "0.0%"
        assert data["translation"]["cacheSize"] == 1
        assert data["server"]["connectedClients"] == 0
        assert data["server"]["uptime"] >= 0

    @pytest.mark.asyncio
    async def test_clear_cache(self, client, app_state):
        await client.post(
            "/api/v1/translate",
            json={"text": "hello", "sourceLang": "en", "targetLang": "ar"},
        )
        response = await client.post("/api/v1/cache/clear")

        assert response.status_code == 200
        assert response.json() == {"message": "Translation cache cleared"}
        assert app_state.engine.cache.size() == 0


class TestAppEndpoints:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["translation"] == "ok"
        assert data["checks"]["adapters"] == ["dictionary"]

    @pytest.mark.asyncio
    async def test_root(self, client):
        response = await client.get("/")
        assert "VoxBridge" in response.json()["message"]


class TestExceptionHandlers:
    """异常到 HTTP 状态码的映射"""

    @pytest.fixture
    def error_app(self):
        app = FastAPI()
        register_exception_handlers(app)

        errors = {
            "language": UnsupportedLanguageError("xx"),
            "malformed": MalformedMessageError("bad payload"),
            "session": SessionNotFoundError("abc"),
            "adapter": AdapterError("google", "HTTP 500"),
            "base": VoxBridgeError("unexpected"),
        }

        @app.get("/raise/{kind}")
        async def raise_error(kind: str):
            raise errors[kind]

        return app

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kind,status",
        [("language", 400), ("malformed", 400), ("session", 404), ("adapter", 502), ("base", 500)],
    )
    async def test_status_codes(self, error_app, kind, status):
        async with AsyncClient(transport=ASGITransport(app=error_app), base_url="http://test") as c:
            response = await c.get(f"/raise/{kind}")

        assert response.status_code == status
        assert "detail" in response.json()
