"""
互动服务

处理点赞切换、点赞列表与内容统计
"""

from typing import Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.db.dao import ContentDAO, LikeDAO
from socialfeed.errors import NotFound
from socialfeed.models import (
    LikeEntry, LikeListResponse, LikeToggleResponse, PaginationMeta,
    StatsResponse, TargetRef, UserBrief
)
from socialfeed.models.target import LIKE_TARGETS
from socialfeed.services.counter_cache import CounterCache
from socialfeed.utils.pagination import page_count


class InteractionService:
    """互动服务"""

    @staticmethod
    async def _require_target(session: AsyncSession, target: TargetRef) -> None:
        if not await ContentDAO.exists(session, target):
            raise NotFound("Content not found")

    @staticmethod
    async def toggle_like(
        session: AsyncSession,
        user_id: str,
        target_type: Optional[str],
        target_id: Optional[str]
    ) -> LikeToggleResponse:
        """
        点赞 / 取消点赞

        已有记录则翻转 is_active，否则创建有效点赞；随后重算计数缓存，
        返回的点赞数从缓存读回。

        Args:
            session: 数据库会话
            user_id: 用户ID
            target_type: 目标类型（article/media/comment）
            target_id: 目标ID

        Returns:
            切换后的状态与点赞总数

        Raises:
            InvalidTarget: 目标类型不支持
            NotFound: 目标不存在
        """
        target = TargetRef.parse(target_type, target_id, LIKE_TARGETS)
        await InteractionService._require_target(session, target)

        like = await LikeDAO.get(session, user_id, target)
        if like is None:
            try:
                like = await LikeDAO.create(session, user_id, target)
            except IntegrityError:
                # 并发请求已创建同一条有效记录，这里会把它翻转回未点赞
                await session.rollback()
                like = await LikeDAO.get(session, user_id, target)
                like.is_active = not like.is_active
        else:
            like.is_active = not like.is_active

        is_liked = like.is_active
        await session.commit()

        await CounterCache.refresh(session, target)
        stats = await CounterCache.read(session, target)

        action = "liked" if is_liked else "unliked"
        logger.info(f"👍 {action} {target} by user {user_id}")

        return LikeToggleResponse(
            message=f"Content {action}",
            action=action,
            likes_count=stats.likes_count,
            is_liked=is_liked,
        )

    @staticmethod
    async def get_likes(
        session: AsyncSession,
        viewer_id: str,
        target_type: Optional[str],
        target_id: Optional[str],
        page: int = 1,
        limit: int = 20
    ) -> LikeListResponse:
        """
        获取目标的点赞用户列表

        Args:
            session: 数据库会话
            viewer_id: 当前用户ID（用于判断点赞状态）
            target_type: 目标类型
            target_id: 目标ID
            page: 页码
            limit: 每页数量
        """
        target = TargetRef.parse(target_type, target_id, LIKE_TARGETS)

        rows = await LikeDAO.list_active(session, target, limit, (page - 1) * limit)
        total = await LikeDAO.count_active(session, target)
        is_liked = await LikeDAO.is_liked(session, viewer_id, target)

        return LikeListResponse(
            likes=[
                LikeEntry(id=like.id, created_at=like.created_at, user=UserBrief.from_user(user))
                for like, user in rows
            ],
            total_likes=total,
            is_liked=is_liked,
            pagination=PaginationMeta(
                page=page, limit=limit, total=total, pages=page_count(total, limit)
            ),
        )

    @staticmethod
    async def get_stats(
        session: AsyncSession,
        viewer_id: str,
        target_type: Optional[str],
        target_id: Optional[str]
    ) -> StatsResponse:
        """
        获取内容统计与当前用户点赞状态

        统计记录不存在时按实时计数创建
        """
        target = TargetRef.parse(target_type, target_id, LIKE_TARGETS)
        await InteractionService._require_target(session, target)

        stats = await CounterCache.get_or_create(session, target)
        is_liked = await LikeDAO.is_liked(session, viewer_id, target)

        return StatsResponse(
            content_type=stats.content_type,
            content_id=stats.content_id,
            likes_count=stats.likes_count,
            comments_count=stats.comments_count,
            views_count=stats.views_count,
            shares_count=stats.shares_count,
            is_liked=is_liked,
            updated_at=stats.updated_at,
        )


# 全局互动服务实例
interaction_service = InteractionService()
