"""
WebSocket Session State
会话状态封装
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from voxbridge.core.exceptions import MalformedMessageError


@dataclass
class SessionConfig:
    """会话配置（源语言、目标语言、采样率）"""

    source_lang: str = "en"
    target_lang: str = "ar"
    sample_rate: int = 16000

    # 入站消息使用 camelCase
    FIELD_NAMES: ClassVar[dict[str, str]] = {
        "sourceLang": "source_lang",
        "targetLang": "target_lang",
        "sampleRate": "sample_rate",
    }

    def merge(self, payload: dict[str, Any]) -> None:
        """合并部分配置；任一字段非法时整体不生效"""
        updates: dict[str, Any] = {}
        for key, value in payload.items():
            attr = self.FIELD_NAMES.get(key)
            if attr is None:
                continue
            if attr == "sample_rate":
                if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                    raise MalformedMessageError("Invalid sampleRate", details=value)
            elif not isinstance(value, str) or not value.strip():
                raise MalformedMessageError(f"Invalid {key}", details=value)
            else:
                value = value.strip()
            updates[attr] = value

        for attr, value in updates.items():
            setattr(self, attr, value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sourceLang": self.source_lang,
            "targetLang": self.target_lang,
            "sampleRate": self.sample_rate,
        }


@dataclass
class Session:
    """封装单个连接的会话状态（仅由所属连接的消息修改）"""

    id: str
    config: SessionConfig = field(default_factory=SessionConfig)
    is_recording: bool = False
    pending_audio: bytearray = field(default_factory=bytearray)

    # 累积阈值参数
    flush_seconds: float = 2.0
    bytes_per_sample: int = 2

    @property
    def flush_threshold(self) -> int:
        """触发转录的累积字节数（约 flush_seconds 秒音频）"""
        return int(self.config.sample_rate * self.bytes_per_sample * self.flush_seconds)

    @property
    def pending_bytes(self) -> int:
        return len(self.pending_audio)

    def start_recording(self):
        """开始录制"""
        self.is_recording = True
        self.pending_audio.clear()

    def stop_recording(self):
        """停止录制"""
        self.is_recording = False

    def append_audio(self, data: bytes) -> bool:
        """录制中才累积音频，返回是否已追加"""
        if not self.is_recording:
            return False
        self.pending_audio.extend(data)
        return True

    def take_audio(self) -> bytes:
        """取出并清空累积的音频"""
        audio = bytes(self.pending_audio)
        self.pending_audio.clear()
        return audio
