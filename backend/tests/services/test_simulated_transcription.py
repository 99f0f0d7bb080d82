"""
Simulated Transcription Provider Tests
模拟转录测试
"""

import random

import numpy as np
import pytest

from voxbridge.services.transcription import SimulatedTranscriptionProvider
from voxbridge.services.transcription.simulated import PHRASES


def pcm(value: int, samples: int) -> bytes:
    """生成恒定振幅的 16-bit 小端 PCM"""
    return np.full(samples, value, dtype="<i2").tobytes()


@pytest.fixture
def provider():
    return SimulatedTranscriptionProvider(min_bytes=1000, rng=random.Random(42))


class TestAnalyze:
    def test_silence(self):
        metrics = SimulatedTranscriptionProvider.analyze(pcm(0, 16000), 16000)
        assert metrics.strength == 0.0
        assert metrics.duration == pytest.approx(1.0)

    def test_loud_constant_signal(self):
        metrics = SimulatedTranscriptionProvider.analyze(pcm(30000, 16000), 16000)
        assert metrics.strength == pytest.approx(30000 / 32768)
        assert metrics.consistency > 0.99

    def test_odd_trailing_byte_ignored(self):
        metrics = SimulatedTranscriptionProvider.analyze(pcm(1000, 10) + b"\x01", 16000)
        assert metrics.duration == pytest.approx(10 / 16000)


class TestTranscribe:
    @pytest.mark.asyncio
    async def test_short_audio_is_silence(self, provider):
        assert await provider.transcribe(b"\x00" * 500, sample_rate=16000, language="en") == ""

    @pytest.mark.asyncio
    async def test_quiet_audio_is_silence(self, provider):
        assert await provider.transcribe(pcm(100, 32000), sample_rate=16000, language="en") == ""

    @pytest.mark.asyncio
    async def test_loud_audio_picks_confident_phrase(self, provider):
        text = await provider.transcribe(pcm(30000, 32000), sample_rate=16000, language="en")
        assert text in PHRASES["en"]["confident"]

    @pytest.mark.asyncio
    async def test_medium_audio_picks_moderate_phrase(self, provider):
        text = await provider.transcribe(pcm(20000, 32000), sample_rate=16000, language="en")
        assert text in PHRASES["en"]["moderate"]

    @pytest.mark.asyncio
    async def test_unknown_language_falls_back_to_english(self, provider):
        text = await provider.transcribe(pcm(10000, 32000), sample_rate=16000, language="xx")
        assert text in PHRASES["en"]["weak"]
