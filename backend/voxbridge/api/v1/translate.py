"""
Translation API Routes
翻译相关接口
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from loguru import logger

from voxbridge.api.deps import get_engine, get_pipeline
from voxbridge.core.languages import detect_language
from voxbridge.schemas.translation import (
    LanguageItem,
    MessageResponse,
    StatsResponse,
    TextTranslateRequest,
    TextTranslateResponse,
)
from voxbridge.services.translation import TranslationEngine
from voxbridge.services.websocket import RealtimePipeline

router = APIRouter(tags=["Translation"])


@router.post("/translate", response_model=TextTranslateResponse)
async def translate_text(
    request: TextTranslateRequest,
    engine: TranslationEngine = Depends(get_engine),
):
    """Translate text"""
    source_lang = request.source_lang
    if source_lang == "auto":
        source_lang = detect_language(request.text)
        logger.debug(f"Detected source language: {source_lang}")

    outcome = await engine.resolve(request.text, source_lang, request.target_lang)

    return TextTranslateResponse(
        original_text=request.text,
        translated_text=outcome.text,
        source_lang=source_lang,
        target_lang=request.target_lang,
        timestamp=datetime.now(timezone.utc).isoformat(),
        method=outcome.adapter,
        quality=round(outcome.quality_score, 3),
        cached=outcome.cached,
        warning=outcome.warning,
    )


@router.get("/languages", response_model=dict[str, LanguageItem])
async def get_languages(engine: TranslationEngine = Depends(get_engine)):
    """Supported languages (code -> display metadata)"""
    return engine.get_supported_languages()


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    request: Request,
    engine: TranslationEngine = Depends(get_engine),
    pipeline: RealtimePipeline = Depends(get_pipeline),
):
    """Translation counters and server status"""
    started_at = getattr(request.app.state, "started_at", time.monotonic())
    return {
        "translation": engine.get_stats(),
        "server": {
            "uptime": round(time.monotonic() - started_at, 3),
            "connectedClients": pipeline.session_count,
        },
    }


@router.post("/cache/clear", response_model=MessageResponse)
async def clear_cache(engine: TranslationEngine = Depends(get_engine)):
    """Clear the translation cache"""
    engine.clear_cache()
    return MessageResponse(message="Translation cache cleared")
