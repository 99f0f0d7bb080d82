"""
Pytest Fixtures
共享测试夹具
"""

import asyncio
import time
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from voxbridge.core.config import Settings
from voxbridge.main import app
from voxbridge.services.transcription import TranscriptionProvider
from voxbridge.services.translation import (
    PhraseTable,
    QualityScorer,
    TranslationCache,
    TranslationEngine,
    build_translation_engine,
)
from voxbridge.services.translation.adapters import MethodTag, StrategyAdapter
from voxbridge.services.websocket import ConnectionManager, RealtimePipeline


class StubAdapter(StrategyAdapter):
    """可控的翻译策略：固定结果 / 抛异常 / 延迟"""

    def __init__(
        self,
        name: str = "stub",
        result: str | None = None,
        method: MethodTag = MethodTag.REMOTE,
        error: Exception | None = None,
        delay: float = 0.0,
        timeout: float = 8.0,
    ):
        super().__init__(timeout=timeout)
        self.name = name
        self.method = method
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = 0

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str | None:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.result


class FakeChannel:
    """记录出站消息的假连接"""

    def __init__(self):
        self.sent: list[dict] = []
        self.closed = False

    async def send_json(self, data):
        if self.closed:
            raise RuntimeError("Cannot call send once a close message has been sent")
        self.sent.append(data)

    def types(self) -> list[str]:
        return [message["type"] for message in self.sent]

    def of_type(self, event_type: str) -> list[dict]:
        return [message for message in self.sent if message["type"] == event_type]


class StaticTranscriber(TranscriptionProvider):
    """返回固定文本的转录服务"""

    name = "static"

    def __init__(self, text: str = "Hello", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls: list[tuple[int, int, str]] = []

    async def transcribe(self, audio: bytes, *, sample_rate: int, language: str) -> str:
        self.calls.append((len(audio), sample_rate, language))
        if self.error:
            raise self.error
        return self.text


@pytest.fixture
def stub_adapter():
    """StubAdapter 类（按需构造）"""
    return StubAdapter


@pytest.fixture
def fake_channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture
def static_transcriber() -> StaticTranscriber:
    return StaticTranscriber()


@pytest.fixture
def test_settings() -> Settings:
    """关闭远端翻译的配置"""
    return Settings(REMOTE_TRANSLATION_ENABLED=False, TRANSLATION_CACHE_SIZE=50)


@pytest.fixture
def small_table() -> PhraseTable:
    """小型英阿短语表"""
    return PhraseTable.from_mapping(
        {
            "en-ar": {
                "good morning": "صباح الخير",
                "thank you": "شكرا لك",
                "hello": "مرحبا",
                "morning": "صباح",
                "good": "جيد",
                "world": "عالم",
                "book": "كتاب",
            }
        },
        common={"en-ar": {"the": "ال"}},
    )


@pytest.fixture
def make_engine(small_table):
    """用给定策略构造引擎"""

    def _make(adapters, capacity: int = 100) -> TranslationEngine:
        return TranslationEngine(
            adapters=adapters,
            scorer=QualityScorer(small_table),
            cache=TranslationCache(capacity),
        )

    return _make


@pytest.fixture
def pipeline(make_engine, stub_adapter, static_transcriber, test_settings) -> RealtimePipeline:
    """实时管线（固定译文 + 固定转录）"""
    engine = make_engine([stub_adapter(name="stub", result="مرحبا")])
    return RealtimePipeline(
        engine=engine,
        transcriber=static_transcriber,
        manager=ConnectionManager(),
        settings=test_settings,
    )


@pytest.fixture
def app_state(test_settings, static_transcriber):
    """为 app.state 装配关闭远端翻译的引擎与管线"""
    engine = build_translation_engine(test_settings)
    manager = ConnectionManager()
    app.state.engine = engine
    app.state.manager = manager
    app.state.pipeline = RealtimePipeline(
        engine=engine,
        transcriber=static_transcriber,
        manager=manager,
        settings=test_settings,
    )
    app.state.started_at = time.monotonic()
    yield app.state
    for name in ("engine", "manager", "pipeline", "started_at"):
        if hasattr(app.state, name):
            delattr(app.state, name)


@pytest.fixture
async def client(app_state) -> AsyncGenerator[AsyncClient, None]:
    """Get test client"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
