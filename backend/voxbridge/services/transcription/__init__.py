"""
Transcription Providers Module
转录服务模块
"""

from .base import TranscriptionProvider
from .simulated import AudioMetrics, SimulatedTranscriptionProvider

__all__ = [
    "TranscriptionProvider",
    "SimulatedTranscriptionProvider",
    "AudioMetrics",
]
