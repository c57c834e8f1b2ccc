"""
互动模块路由（点赞、统计）
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.api.deps import get_current_user, get_db_session
from socialfeed.models import (
    LikeListResponse, LikeToggleRequest, LikeToggleResponse, StatsResponse
)
from socialfeed.services.interaction_service import interaction_service
from socialfeed.utils.pagination import normalize_page

router = APIRouter()


@router.post("/likes", response_model=LikeToggleResponse)
async def toggle_like(
    data: LikeToggleRequest,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    点赞 / 取消点赞

    - 需要登录
    - 支持 article / media / comment
    - 重复调用在点赞与取消之间切换
    """
    return await interaction_service.toggle_like(
        session, current_user["user_id"], data.target_type, data.target_id
    )


@router.get("/likes/{target_type}/{target_id}", response_model=LikeListResponse)
async def get_likes(
    target_type: str,
    target_id: str,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """点赞用户列表"""
    page_num, limit_num = normalize_page(page, limit)
    return await interaction_service.get_likes(
        session, current_user["user_id"], target_type, target_id, page_num, limit_num
    )


@router.get("/stats/{target_type}/{target_id}", response_model=StatsResponse)
async def get_stats(
    target_type: str,
    target_id: str,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    内容统计

    - 点赞/评论/浏览/分享数
    - 当前用户是否已点赞
    """
    return await interaction_service.get_stats(
        session, current_user["user_id"], target_type, target_id
    )
