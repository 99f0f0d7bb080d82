"""
API v1 Router
汇总所有 API 路由
"""

from fastapi import APIRouter

from voxbridge.api.v1.translate import router as translate_router
from voxbridge.api.v1.ws import router as ws_router  # WebSocket translation

api_router = APIRouter()

# Include all routers
api_router.include_router(translate_router)
api_router.include_router(ws_router)
