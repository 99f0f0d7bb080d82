"""
WebSocket Connection Manager
连接管理器
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Protocol

from loguru import logger


class OutboundChannel(Protocol):
    """出站通道（FastAPI WebSocket 满足此协议）"""

    async def send_json(self, data: Any) -> None: ...


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ConnectionManager:
    """管理出站连接；向已关闭的连接发送时静默丢弃"""

    def __init__(self):
        self.active_connections: dict[str, OutboundChannel] = {}

    def connect(self, client_id: str, channel: OutboundChannel):
        """注册连接"""
        self.active_connections[client_id] = channel
        logger.debug(f"WebSocket connected: {client_id}")

    def disconnect(self, client_id: str):
        """断开连接"""
        if client_id in self.active_connections:
            del self.active_connections[client_id]
            logger.debug(f"WebSocket disconnected: {client_id}")

    def get(self, client_id: str) -> OutboundChannel | None:
        """获取连接"""
        return self.active_connections.get(client_id)

    def is_connected(self, client_id: str) -> bool:
        """检查是否已连接"""
        return client_id in self.active_connections

    @property
    def count(self) -> int:
        return len(self.active_connections)

    async def send_json(self, client_id: str, data: dict) -> bool:
        """发送 JSON 消息，返回是否成功"""
        channel = self.active_connections.get(client_id)
        if not channel:
            return False

        try:
            await channel.send_json(data)
            return True
        except Exception as e:
            logger.warning(f"Failed to send to {client_id}: {e}")
            self.disconnect(client_id)
            return False

    async def send_event(self, client_id: str, event_type: str, data: dict) -> bool:
        """发送事件 {"type": ..., "data": {...}}"""
        return await self.send_json(client_id, {"type": event_type, "data": data})

    async def send_error(self, client_id: str, message: str, details: Any = None) -> bool:
        """发送错误事件"""
        return await self.send_event(
            client_id,
            "error",
            {"message": message, "details": details, "timestamp": utc_timestamp()},
        )

    async def send_pong(self, client_id: str) -> bool:
        """发送 pong 响应"""
        return await self.send_event(client_id, "pong", {"timestamp": utc_timestamp()})
