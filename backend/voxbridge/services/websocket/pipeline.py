"""
Realtime Session Pipeline
实时会话管线 - 控制消息分发、音频累积、转录 -> 翻译

每个连接的消息按到达顺序串行处理（由路由的接收循环保证）；
不同会话之间相互独立，共享同一个翻译引擎。
"""

from __future__ import annotations

import json
import uuid
from collections.abc import Awaitable, Callable
from typing import Any

from loguru import logger

from voxbridge.core.config import Settings, get_settings
from voxbridge.core.exceptions import (
    MalformedMessageError,
    SessionNotFoundError,
    TranscriptionError,
    UnknownMessageTypeError,
)
from voxbridge.core.languages import is_supported
from voxbridge.core.logging import log_ws_event
from voxbridge.services.transcription import TranscriptionProvider
from voxbridge.services.translation import TranslationEngine

from .connection_manager import ConnectionManager, OutboundChannel, utc_timestamp
from .session import Session, SessionConfig

Handler = Callable[[Session, dict[str, Any]], Awaitable[None]]


class RealtimePipeline:
    """
    实时管线

    Attributes:
        engine: 共享翻译引擎
        transcriber: 转录服务（可替换）
        manager: 出站连接管理
        sessions: 会话表 session_id -> Session
    """

    def __init__(
        self,
        engine: TranslationEngine,
        transcriber: TranscriptionProvider,
        manager: ConnectionManager | None = None,
        settings: Settings | None = None,
    ):
        self.engine = engine
        self.transcriber = transcriber
        self.manager = manager or ConnectionManager()
        self.settings = settings or get_settings()
        self.sessions: dict[str, Session] = {}

        self._handlers: dict[str, Handler] = {
            "config": self._on_config,
            "start_recording": self._on_start_recording,
            "stop_recording": self._on_stop_recording,
            "translate_text": self._on_translate_text,
            "ping": self._on_ping,
        }

    @property
    def session_count(self) -> int:
        return len(self.sessions)

    def get_session(self, session_id: str) -> Session:
        """按 ID 查找会话；不存在时抛出 SessionNotFoundError"""
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    # ========== 连接生命周期 ==========

    async def connect(self, channel: OutboundChannel) -> Session:
        """注册新会话并发送 connection 事件"""
        session = Session(
            id=str(uuid.uuid4()),
            config=SessionConfig(
                source_lang=self.settings.DEFAULT_SOURCE_LANG,
                target_lang=self.settings.DEFAULT_TARGET_LANG,
                sample_rate=self.settings.DEFAULT_SAMPLE_RATE,
            ),
            flush_seconds=self.settings.AUDIO_FLUSH_SECONDS,
            bytes_per_sample=self.settings.AUDIO_BYTES_PER_SAMPLE,
        )
        self.sessions[session.id] = session
        self.manager.connect(session.id, channel)

        log_ws_event("connect", session.id, {"sessions": self.session_count})
        await self.manager.send_event(
            session.id,
            "connection",
            {
                "status": "connected",
                "clientId": session.id,
                "message": "Connected to real-time translation server",
                "config": session.config.to_dict(),
            },
        )
        return session

    def disconnect(self, session_id: str):
        """移除会话，未处理的音频直接丢弃"""
        session = self.sessions.pop(session_id, None)
        self.manager.disconnect(session_id)
        if session is not None:
            log_ws_event(
                "disconnect",
                session_id,
                {"discarded_bytes": session.pending_bytes, "sessions": self.session_count},
            )

    # ========== 入站消息 ==========

    async def handle_text(self, session_id: str, raw: str | bytes):
        """处理文本帧（JSON 控制消息）"""
        try:
            message = json.loads(raw)
        except (ValueError, UnicodeDecodeError) as e:
            await self.manager.send_error(session_id, "Invalid message format", str(e))
            return

        if not isinstance(message, dict):
            err = MalformedMessageError("Message must be a JSON object", details=type(message).__name__)
            await self.manager.send_error(session_id, err.message, err.details)
            return

        await self.handle_message(session_id, message)

    async def handle_bytes(self, session_id: str, data: bytes):
        """处理二进制帧（音频片段）；未在录制时忽略"""
        session = self.sessions.get(session_id)
        if session is None or not session.append_audio(data):
            return

        if session.pending_bytes >= session.flush_threshold:
            await self._flush_audio(session, final=False)

    async def handle_message(self, session_id: str, message: dict[str, Any]):
        """按 type 分发控制消息；错误转为 error 事件，会话保持可用"""
        session = self.sessions.get(session_id)
        if session is None:
            logger.debug(f"Message for unknown session dropped: {session_id}")
            return

        message_type = message.get("type")
        log_ws_event("message", session_id, {"message_type": message_type})

        handler = self._handlers.get(message_type) if isinstance(message_type, str) else None
        if handler is None:
            err = UnknownMessageTypeError(message_type)
            logger.warning(f"{err.message} (session {session_id})")
            await self.manager.send_error(session_id, err.message, err.details)
            return

        try:
            await handler(session, message)
        except MalformedMessageError as e:
            await self.manager.send_error(session_id, e.message, e.details)
        except Exception as e:
            logger.exception(f"Message processing failed ({message_type}): {e}")
            await self.manager.send_error(session_id, "Message processing failed", str(e))

    # ========== 控制消息处理 ==========

    async def _on_config(self, session: Session, message: dict[str, Any]):
        payload = message.get("data")
        if not isinstance(payload, dict):
            payload = {k: v for k, v in message.items() if k != "type"}

        session.config.merge(payload)

        ack: dict[str, Any] = {"status": "updated", "config": session.config.to_dict()}
        unsupported = [
            code
            for code in (session.config.source_lang, session.config.target_lang)
            if not is_supported(code)
        ]
        if unsupported:
            ack["warning"] = f"Unsupported language: {', '.join(unsupported)}"

        log_ws_event("config", session.id, session.config.to_dict())
        await self.manager.send_event(session.id, "config", ack)

    async def _on_start_recording(self, session: Session, message: dict[str, Any]):
        session.start_recording()
        log_ws_event("start_recording", session.id)
        await self.manager.send_event(
            session.id,
            "recording",
            {"status": "started", "message": "Recording started - speak now!"},
        )

    async def _on_stop_recording(self, session: Session, message: dict[str, Any]):
        session.stop_recording()
        log_ws_event("stop_recording", session.id, {"pending_bytes": session.pending_bytes})

        if session.pending_bytes:
            await self._flush_audio(session, final=True)

        await self.manager.send_event(
            session.id,
            "recording",
            {"status": "stopped", "message": "Recording stopped"},
        )

    async def _on_translate_text(self, session: Session, message: dict[str, Any]):
        text = message.get("text")
        if text is None and isinstance(message.get("data"), dict):
            text = message["data"].get("text")

        if not isinstance(text, str) or not text.strip():
            raise MalformedMessageError("translate_text requires a non-empty 'text' field")

        await self._translate_and_send(session, text)

    async def _on_ping(self, session: Session, message: dict[str, Any]):
        await self.manager.send_pong(session.id)

    # ========== 转录 -> 翻译 ==========

    async def _flush_audio(self, session: Session, final: bool):
        """把累积音频交给转录服务；非空结果再送去翻译"""
        audio = session.take_audio()
        if not audio:
            return

        language = session.config.source_lang
        try:
            transcript = await self.transcriber.transcribe(
                audio,
                sample_rate=session.config.sample_rate,
                language=language,
            )
        except TranscriptionError as e:
            logger.error(f"Transcription failed for {session.id}: {e.message}")
            await self.manager.send_error(session.id, "Audio processing failed", e.message)
            return
        except Exception as e:
            logger.exception(f"Transcription failed for {session.id}: {e}")
            await self.manager.send_error(session.id, "Audio processing failed", str(e))
            return

        if session.id not in self.sessions:
            return
        if not transcript or not transcript.strip():
            log_ws_event("silence", session.id, {"bytes": len(audio)})
            return

        await self.manager.send_event(
            session.id,
            "final_transcript" if final else "transcript",
            {"text": transcript, "language": language, "timestamp": utc_timestamp()},
        )
        await self._translate_and_send(session, transcript)

    async def _translate_and_send(self, session: Session, text: str):
        source_lang = session.config.source_lang
        target_lang = session.config.target_lang

        outcome = await self.engine.resolve(text, source_lang, target_lang)

        # 翻译期间会话已断开：结果丢弃
        if session.id not in self.sessions:
            logger.debug(f"Session {session.id} closed, translation discarded")
            return

        data: dict[str, Any] = {
            "originalText": text,
            "translatedText": outcome.text,
            "sourceLang": source_lang,
            "targetLang": target_lang,
            "timestamp": utc_timestamp(),
            "method": outcome.adapter,
            "quality": round(outcome.quality_score, 3),
            "cached": outcome.cached,
        }
        if outcome.warning:
            data["warning"] = outcome.warning

        await self.manager.send_event(session.id, "translation", data)
