"""
信息流路由
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from socialfeed.api.deps import get_current_user, get_session_factory
from socialfeed.models import SocialFeedResponse, UnifiedFeedResponse
from socialfeed.services.feed_service import feed_service
from socialfeed.utils.pagination import normalize_page

router = APIRouter()


def _flag(value: Optional[str]) -> bool:
    # 仅字面量 "false" 关闭
    return (value or "true").lower() != "false"


@router.get("/social", response_model=SocialFeedResponse)
async def get_social_feed(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    current_user: dict = Depends(get_current_user),
    session_factory=Depends(get_session_factory)
):
    """
    社交信息流

    - 需要登录
    - 文章与媒体按创建时间倒序合并
    - 非法的 page/limit 回退为默认值
    """
    page_num, limit_num = normalize_page(page, limit)
    return await feed_service.get_social_feed(
        session_factory, current_user["user_id"], page_num, limit_num
    )


@router.get("/unified", response_model=UnifiedFeedResponse)
async def get_unified_feed(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    include_media: Optional[str] = Query("true", alias="includeMedia"),
    include_articles: Optional[str] = Query("true", alias="includeArticles"),
    current_user: dict = Depends(get_current_user),
    session_factory=Depends(get_session_factory)
):
    """
    统一信息流

    - 支持关键字搜索（标题、正文/描述、标签）
    - includeMedia / includeArticles 为 "false" 时排除对应类型
    """
    page_num, limit_num = normalize_page(page, limit)
    return await feed_service.get_unified_feed(
        session_factory,
        current_user["user_id"],
        page_num,
        limit_num,
        search=search or None,
        include_articles=_flag(include_articles),
        include_media=_flag(include_media),
    )


@router.get("/public", response_model=SocialFeedResponse)
async def get_public_feed(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    session_factory=Depends(get_session_factory)
):
    """公开信息流（游客可看）"""
    page_num, limit_num = normalize_page(page, limit)
    return await feed_service.get_public_feed(
        session_factory, page_num, limit_num, search=search or None
    )
