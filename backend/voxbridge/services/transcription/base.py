"""
Base Transcription Provider
抽象基类 - 将音频片段转为文本的外部协作者

会话管道只依赖这个接口，可替换为任意真实的语音识别实现。
"""

from abc import ABC, abstractmethod


class TranscriptionProvider(ABC):
    """
    转录服务抽象基类

    transcribe() 对静音返回空串；失败时抛出 TranscriptionError。
    """

    name: str = "transcriber"

    @abstractmethod
    async def transcribe(self, audio: bytes, *, sample_rate: int, language: str) -> str:
        """转录音频片段"""
        pass
