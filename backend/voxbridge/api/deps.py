"""
API Dependencies
共用的依赖注入（共享对象在 lifespan 中创建并挂在 app.state 上）
"""

from fastapi import HTTPException, Request, WebSocket, status

from voxbridge.services.translation import TranslationEngine
from voxbridge.services.websocket import RealtimePipeline


def _state_attr(state, name: str):
    value = getattr(state, name, None)
    if value is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{name} not initialized",
        )
    return value


def get_engine(request: Request) -> TranslationEngine:
    """Get the shared translation engine"""
    return _state_attr(request.app.state, "engine")


def get_pipeline(request: Request) -> RealtimePipeline:
    """Get the realtime pipeline"""
    return _state_attr(request.app.state, "pipeline")


def get_ws_pipeline(websocket: WebSocket) -> RealtimePipeline:
    """WebSocket 路由使用的管线依赖"""
    return websocket.app.state.pipeline
