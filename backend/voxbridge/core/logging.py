"""
Logging Configuration
日志配置 - 开发环境彩色输出，生产环境 JSON 单行记录

每条记录都带 session 字段：实时会话内的日志绑定会话 ID，其余为 "-"。
翻译策略调用统一通过 log_adapter_call 记录耗时与结果。
"""

from __future__ import annotations

import json
import sys
from typing import Any

from loguru import logger

from voxbridge.core.config import settings

NO_SESSION = "-"

# 提升到 JSON 顶层的上下文字段
CONTEXT_FIELDS = ("session_id", "event", "adapter", "method")

COLORED_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[session_id]:.8}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def json_serializer(record: dict) -> str:
    """将日志记录序列化为单行 JSON（会话与策略字段提升到顶层）"""
    extra = {k: v for k, v in record["extra"].items() if not k.startswith("_")}

    entry: dict[str, Any] = {
        "timestamp": record["time"].strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
        "level": record["level"].name,
        "logger": f"{record['name']}:{record['function']}:{record['line']}",
        "message": record["message"],
    }
    for field in CONTEXT_FIELDS:
        value = extra.pop(field, None)
        if value is not None and value != NO_SESSION:
            entry[field] = value
    if extra:
        entry["extra"] = extra

    exc = record["exception"]
    if exc:
        entry["error"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
            "traceback": "".join(exc.traceback.format()) if exc.traceback else None,
        }

    return json.dumps(entry, ensure_ascii=False, default=str)


def json_sink(message):
    sys.stderr.write(json_serializer(message.record) + "\n")
    sys.stderr.flush()


def setup_logging() -> None:
    """
    配置日志系统

    - development: 彩色格式，带会话 ID 前缀
    - production: JSON 格式，便于按 session_id / adapter 检索
    """
    logger.remove()
    logger.configure(extra={"session_id": NO_SESSION})

    if settings.ENVIRONMENT == "production":
        logger.add(json_sink, level=settings.LOG_LEVEL, backtrace=True, diagnose=False)
    else:
        logger.add(
            sys.stderr,
            level=settings.LOG_LEVEL,
            format=COLORED_FORMAT,
            backtrace=True,
            diagnose=True,
        )
    logger.info(f"Logging configured ({settings.ENVIRONMENT}, {settings.LOG_LEVEL})")


def log_ws_event(event: str, session_id: str, details: dict[str, Any] | None = None):
    """记录实时会话事件，日志绑定 session_id"""
    logger.bind(session_id=session_id, event=event, **(details or {})).debug(f"Session {event}")


def log_adapter_call(
    adapter: str,
    method: str,
    duration_ms: float,
    success: bool,
    error: str | None = None,
):
    """记录一次翻译策略调用；失败记为 warning"""
    bound = logger.bind(
        adapter=adapter,
        method=method,
        duration_ms=round(duration_ms, 2),
        success=success,
        error=error,
    )
    if success:
        bound.info(f"{adapter} ({method}) answered in {duration_ms:.0f}ms")
    else:
        bound.warning(f"{adapter} ({method}) gave no candidate after {duration_ms:.0f}ms: {error}")
