"""
API v1 路由汇总
"""

from fastapi import APIRouter

from socialfeed.models import ErrorResponse

from .feed import router as feed_router
from .interaction import router as interaction_router
from .comment import router as comment_router
from .presence import router as presence_router

# 创建 v1 API 路由（业务异常统一返回 {"error": ...}）
api_router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    }
)

# 信息流
api_router.include_router(feed_router, prefix="/feed", tags=["Feed"])

# 互动功能路由
api_router.include_router(interaction_router, tags=["Interaction"])
api_router.include_router(comment_router, tags=["Comment"])

# 在线状态
api_router.include_router(presence_router, prefix="/users", tags=["Presence"])
