"""
Exception Handlers
全局异常处理器，将自定义异常转换为 HTTP 响应
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from voxbridge.core.exceptions import (
    AdapterError,
    ConfigurationError,
    MalformedMessageError,
    SessionNotFoundError,
    TranscriptionError,
    UnsupportedLanguageError,
    VoxBridgeError,
)


def register_exception_handlers(app: FastAPI) -> None:
    """注册全局异常处理器"""

    @app.exception_handler(UnsupportedLanguageError)
    async def unsupported_language_handler(request: Request, exc: UnsupportedLanguageError):
        return JSONResponse(
            status_code=400,
            content={"detail": exc.message, "language": exc.language},
        )

    @app.exception_handler(MalformedMessageError)
    async def malformed_message_handler(request: Request, exc: MalformedMessageError):
        return JSONResponse(
            status_code=400,
            content={"detail": exc.message},
        )

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found_handler(request: Request, exc: SessionNotFoundError):
        return JSONResponse(
            status_code=404,
            content={"detail": exc.message},
        )

    @app.exception_handler(AdapterError)
    async def adapter_error_handler(request: Request, exc: AdapterError):
        logger.error(f"Adapter Error: {exc.message}", adapter=exc.adapter)
        return JSONResponse(
            status_code=502,
            content={"detail": exc.message, "adapter": exc.adapter},
        )

    @app.exception_handler(TranscriptionError)
    async def transcription_error_handler(request: Request, exc: TranscriptionError):
        logger.error(f"Transcription Error: {exc.message}", provider=exc.provider)
        return JSONResponse(
            status_code=502,
            content={"detail": exc.message, "provider": exc.provider},
        )

    @app.exception_handler(ConfigurationError)
    async def config_error_handler(request: Request, exc: ConfigurationError):
        logger.error(f"Configuration Error: {exc.message}")
        return JSONResponse(
            status_code=500,
            content={"detail": exc.message},
        )

    @app.exception_handler(VoxBridgeError)
    async def voxbridge_error_handler(request: Request, exc: VoxBridgeError):
        """兜底处理所有 VoxBridgeError"""
        logger.error(f"VoxBridge Error: {exc.message}")
        return JSONResponse(
            status_code=500,
            content={"detail": exc.message},
        )
