"""
Simulated Transcription Provider
模拟转录 - 基于振幅特征挑选预置短语的占位实现

工作原理:
1. 将音频按 16-bit 小端 PCM 解析
2. 计算强度（平均振幅）与稳定度（相邻采样变化）
3. 按强度/稳定度选择置信档位
4. 按音频时长在档位内选择短语
"""

from __future__ import annotations

import random
from dataclasses import dataclass

import numpy as np
from loguru import logger

from voxbridge.core.exceptions import TranscriptionError

from .base import TranscriptionProvider

PHRASES: dict[str, dict[str, list[str]]] = {
    "en": {
        "confident": [
            "Hello, how are you today?",
            "I need help with translation",
            "This is a test of the speech system",
            "The weather is beautiful today",
            "Thank you for your assistance",
            "Can you help me with this?",
            "I would like to learn more",
            "This application works very well",
        ],
        "moderate": [
            "Hello there",
            "Good morning",
            "How are you?",
            "Thank you",
            "Yes, please",
            "That sounds good",
            "I understand",
            "Let me think about it",
        ],
        "weak": [
            "Hello",
            "Yes",
            "No",
            "Thanks",
            "OK",
            "Sure",
            "Maybe",
            "Good",
        ],
    }
}


@dataclass
class AudioMetrics:
    """音频特征"""

    strength: float
    consistency: float
    duration: float


class SimulatedTranscriptionProvider(TranscriptionProvider):
    """
    模拟转录服务

    不做真正的语音识别；用于演示与测试完整的转录 -> 翻译链路。
    """

    name = "simulated"

    def __init__(self, min_bytes: int = 1000, rng: random.Random | None = None):
        self.min_bytes = min_bytes
        self.rng = rng or random.Random()

    async def transcribe(self, audio: bytes, *, sample_rate: int, language: str) -> str:
        if len(audio) < self.min_bytes:
            return ""  # 太短，视为静音

        try:
            metrics = self.analyze(audio, sample_rate)
        except (ValueError, ZeroDivisionError) as e:
            raise TranscriptionError(str(e), provider=self.name) from e

        tier = self._select_tier(metrics)
        if tier is None:
            return ""

        transcript = self._pick_phrase(language, tier, metrics)
        logger.debug(
            f"Simulated transcript ({tier}, strength={metrics.strength:.2f}, "
            f"consistency={metrics.consistency:.2f}): {transcript}"
        )
        return transcript

    @staticmethod
    def analyze(audio: bytes, sample_rate: int) -> AudioMetrics:
        """计算强度、稳定度与时长"""
        usable = len(audio) - len(audio) % 2
        samples = np.frombuffer(audio[:usable], dtype="<i2").astype(np.float64)
        if samples.size == 0:
            return AudioMetrics(strength=0.0, consistency=0.0, duration=0.0)

        amplitude = np.abs(samples)
        strength = min(float(amplitude.mean()) / 32768.0, 1.0)

        if samples.size > 1:
            variation = np.abs(np.diff(amplitude)) / 32768.0
            consistency = min(float((1.0 - variation).sum()) / samples.size, 1.0)
        else:
            consistency = 0.0

        return AudioMetrics(
            strength=strength,
            consistency=consistency,
            duration=samples.size / sample_rate,
        )

    @staticmethod
    def _select_tier(metrics: AudioMetrics) -> str | None:
        if metrics.strength > 0.8 and metrics.consistency > 0.7:
            return "confident"
        if metrics.strength > 0.5 and metrics.consistency > 0.5:
            return "moderate"
        if metrics.strength > 0.2:
            return "weak"
        return None

    def _pick_phrase(self, language: str, tier: str, metrics: AudioMetrics) -> str:
        phrases = PHRASES.get(language, PHRASES["en"])[tier]

        # 音频越长，短语越长（档位内越靠前）
        if metrics.duration > 3:
            index = self.rng.randrange(min(5, len(phrases)))
        elif metrics.duration > 1.5:
            index = self.rng.randrange(min(3, len(phrases))) + 2
        else:
            index = self.rng.randrange(min(3, len(phrases))) + 5

        return phrases[min(index, len(phrases) - 1)]
