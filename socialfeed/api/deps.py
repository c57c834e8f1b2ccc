"""
API 依赖注入 - 认证、数据库连接、在线状态等
"""

from typing import AsyncIterator
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.config import settings
from socialfeed.db import base
from socialfeed.services.presence_service import PresenceStore
from socialfeed.utils.auth import decode_access_token

# JWT 认证
security = HTTPBearer(auto_error=False)


def _require_database():
    if not settings.DATABASE_ENABLED:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is not enabled"
        )


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """
    获取数据库会话（依赖注入用）

    Yields:
        AsyncSession: 数据库会话
    """
    _require_database()

    async for session in base.get_db():
        yield session


def get_session_factory():
    """
    获取会话工厂（信息流按内容类型各开一个会话）
    """
    _require_database()
    return base.get_session_factory()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> dict:
    """
    从 JWT Token 中解析当前用户

    Returns:
        用户信息字典 {"user_id": "...", "username": "..."}
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )

    payload = decode_access_token(credentials.credentials)
    user_id = payload.get("sub") if payload else None
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials"
        )

    return {
        "user_id": user_id,
        "username": payload.get("username", "")
    }


def get_presence_store(request: Request) -> PresenceStore:
    """获取应用级在线状态表"""
    return request.app.state.presence
