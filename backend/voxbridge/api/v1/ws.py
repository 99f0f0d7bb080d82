"""
WebSocket API Routes
实时翻译接口

文本帧: JSON 控制消息（config / start_recording / stop_recording / translate_text / ping）
二进制帧: 16-bit PCM 音频片段
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from loguru import logger
from starlette.websockets import WebSocketState

from voxbridge.api.deps import get_pipeline, get_ws_pipeline
from voxbridge.schemas.translation import SessionStatusResponse
from voxbridge.services.websocket import RealtimePipeline

router = APIRouter(prefix="/ws", tags=["WebSocket"])


@router.websocket("/translate")
async def websocket_translate(websocket: WebSocket):
    """
    Real-time translation WebSocket endpoint.

    同一连接的消息按顺序逐条处理；处理失败只产生 error 事件，不会断开连接。
    """
    pipeline = get_ws_pipeline(websocket)
    await websocket.accept()
    session = await pipeline.connect(websocket)
    client_id = session.id

    try:
        with logger.contextualize(session_id=client_id):
            while True:
                message = await websocket.receive()

                if message["type"] == "websocket.disconnect":
                    logger.info(f"WebSocket disconnected: {client_id}")
                    break

                if message.get("bytes") is not None:
                    await pipeline.handle_bytes(client_id, message["bytes"])
                elif message.get("text") is not None:
                    await pipeline.handle_text(client_id, message["text"])

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: {client_id}")
    except RuntimeError as e:
        if websocket.client_state == WebSocketState.DISCONNECTED:
            logger.info(f"WebSocket already closed: {client_id}")
        else:
            logger.error(f"WebSocket runtime error: {e}")
    finally:
        pipeline.disconnect(client_id)


@router.get("/sessions/{session_id}", response_model=SessionStatusResponse)
async def get_session_status(
    session_id: str,
    pipeline: RealtimePipeline = Depends(get_pipeline),
):
    """Status of a connected realtime session (404 if unknown)"""
    session = pipeline.get_session(session_id)
    return SessionStatusResponse(
        client_id=session.id,
        config=session.config.to_dict(),
        is_recording=session.is_recording,
        pending_bytes=session.pending_bytes,
    )
