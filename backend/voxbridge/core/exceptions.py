"""
Custom Exceptions
应用级自定义异常类型

翻译链路上的异常大多在内部被吸收（降级为哨兵字符串或 error 事件），
这里的类型用于日志、HTTP 映射以及会话内的错误事件。
"""

from __future__ import annotations

from typing import Any


class VoxBridgeError(Exception):
    """应用基础异常"""

    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(message)


# ========== 翻译相关异常 ==========


class TranslationError(VoxBridgeError):
    """翻译异常基类"""

    pass


class UnsupportedLanguageError(TranslationError):
    """语言代码不在支持列表中"""

    def __init__(self, language: str):
        super().__init__(f"Unsupported language: '{language}'", details=language)
        self.language = language


class AdapterError(TranslationError):
    """单个翻译策略失败（始终被引擎吸收）"""

    def __init__(self, adapter: str, message: str, details: Any = None):
        super().__init__(f"{adapter} adapter failed: {message}", details)
        self.adapter = adapter


class NoCandidatesAvailableError(TranslationError):
    """所有翻译策略都未给出候选"""

    def __init__(self, text: str):
        super().__init__(f"No translation candidates for: {text}", details=text)
        self.text = text


# ========== 转录异常 ==========


class TranscriptionError(VoxBridgeError):
    """转录服务异常"""

    def __init__(self, message: str, provider: str | None = None, details: Any = None):
        super().__init__(f"Transcription error: {message}", details)
        self.provider = provider


# ========== 会话异常 ==========


class SessionError(VoxBridgeError):
    """会话异常基类"""

    pass


class MalformedMessageError(SessionError):
    """无法解析的入站消息"""

    pass


class UnknownMessageTypeError(SessionError):
    """未知消息类型"""

    def __init__(self, message_type: Any):
        super().__init__(f"Unknown message type: {message_type}", details=message_type)
        self.message_type = message_type


class SessionNotFoundError(SessionError):
    """会话不存在"""

    def __init__(self, session_id: str):
        super().__init__(f"Session '{session_id}' not found", details=session_id)
        self.session_id = session_id


# ========== 配置异常 ==========


class ConfigurationError(VoxBridgeError):
    """配置错误"""

    pass


class InvalidConfigError(ConfigurationError):
    """无效配置值"""

    def __init__(self, config_key: str, value: Any, reason: str | None = None):
        message = f"Invalid configuration value for '{config_key}': {value}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.config_key = config_key
        self.value = value
