# WebSocket Services Package
"""
WebSocket 服务模块

包含:
- session.py: 会话状态封装
- connection_manager.py: 连接管理
- pipeline.py: 实时管线（消息分发、音频累积、转录 -> 翻译）
"""

from voxbridge.services.websocket.connection_manager import ConnectionManager, OutboundChannel
from voxbridge.services.websocket.pipeline import RealtimePipeline
from voxbridge.services.websocket.session import Session, SessionConfig

__all__ = [
    "Session",
    "SessionConfig",
    "ConnectionManager",
    "OutboundChannel",
    "RealtimePipeline",
]
