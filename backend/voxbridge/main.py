"""
VoxBridge Backend - FastAPI Application
实时语音转录翻译服务后端
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from voxbridge.__version__ import __version__
from voxbridge.api.v1.router import api_router
from voxbridge.core.config import settings
from voxbridge.core.exception_handlers import register_exception_handlers
from voxbridge.core.logging import setup_logging
from voxbridge.services.transcription import SimulatedTranscriptionProvider
from voxbridge.services.translation import build_translation_engine
from voxbridge.services.websocket import ConnectionManager, RealtimePipeline

# Configure logging (JSON in production, colored in development)
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("🚀 Starting VoxBridge Backend...")
    logger.info(f"📝 Environment: {settings.ENVIRONMENT}")

    engine = build_translation_engine(settings)
    manager = ConnectionManager()
    app.state.engine = engine
    app.state.manager = manager
    app.state.pipeline = RealtimePipeline(
        engine=engine,
        transcriber=SimulatedTranscriptionProvider(min_bytes=settings.MIN_TRANSCRIBE_BYTES),
        manager=manager,
        settings=settings,
    )
    app.state.started_at = time.monotonic()
    logger.info("✅ Translation engine ready")

    yield

    logger.info(f"📊 Final stats: {engine.get_stats()}")
    logger.info("👋 Shutting down VoxBridge Backend...")


app = FastAPI(
    title="VoxBridge API",
    description="实时语音转录翻译服务 API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register custom exception handlers
register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check with component status"""
    result = {
        "status": "healthy",
        "version": __version__,
        "checks": {},
    }

    engine = getattr(app.state, "engine", None)
    if engine is not None:
        result["checks"]["translation"] = "ok"
        result["checks"]["adapters"] = [adapter.name for adapter in engine.adapters]
    else:
        result["checks"]["translation"] = "not initialized"
        result["status"] = "degraded"

    pipeline = getattr(app.state, "pipeline", None)
    result["checks"]["sessions"] = pipeline.session_count if pipeline else 0

    return result


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Welcome to VoxBridge API",
        "docs": "/docs",
        "version": __version__,
        "websocket": "/api/v1/ws/translate",
    }


def run():
    """Run the server with uvicorn"""
    import uvicorn

    uvicorn.run("voxbridge.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)


if __name__ == "__main__":
    run()
