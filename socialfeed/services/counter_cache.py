"""
互动计数缓存

content_stats 表保存每个 (类型, ID) 的点赞/评论/浏览/分享计数。
每次点赞或评论变更后整体重算（不做增量加减），写入是幂等的 upsert，
并发重算会收敛到同一个值。
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.db.dao import CommentDAO, LikeDAO, StatsDAO
from socialfeed.db.models.content_stats import ContentStats
from socialfeed.models.target import COMMENT_TARGETS, TargetKind, TargetRef


@dataclass(frozen=True)
class StatsSnapshot:
    """计数快照（缓存记录不存在时为全零）"""
    content_type: str
    content_id: str
    likes_count: int = 0
    comments_count: int = 0
    views_count: int = 0
    shares_count: int = 0
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entry(cls, target: TargetRef, entry: Optional[ContentStats]) -> "StatsSnapshot":
        if entry is None:
            return cls(content_type=target.kind.value, content_id=target.id)
        return cls(
            content_type=entry.content_type,
            content_id=entry.content_id,
            likes_count=entry.likes_count,
            comments_count=entry.comments_count,
            views_count=entry.views_count,
            shares_count=entry.shares_count,
            updated_at=entry.updated_at,
        )


class CounterCache:
    """计数缓存服务"""

    @staticmethod
    async def recompute(session: AsyncSession, target: TargetRef) -> ContentStats:
        """
        重新统计目标的有效点赞数与未删除评论数并写入缓存

        评论目标同时把点赞数同步到 comments.likes_count
        """
        likes_count = await LikeDAO.count_active(session, target)
        comments_count = 0
        if target.kind in COMMENT_TARGETS:
            comments_count = await CommentDAO.count_visible(session, target)

        entry = await StatsDAO.upsert_counts(session, target, likes_count, comments_count)

        if target.kind == TargetKind.COMMENT:
            await CommentDAO.set_likes_count(session, target.id, likes_count)

        logger.debug(f"Recomputed stats for {target}: likes={likes_count}, comments={comments_count}")
        return entry

    @staticmethod
    async def read(session: AsyncSession, target: TargetRef) -> StatsSnapshot:
        """读取计数，不存在时返回全零快照（不写库）"""
        entry = await StatsDAO.get(session, target)
        return StatsSnapshot.from_entry(target, entry)

    @staticmethod
    async def get_or_create(session: AsyncSession, target: TargetRef) -> StatsSnapshot:
        """读取计数，不存在时按实时统计创建"""
        entry = await StatsDAO.get(session, target)
        if entry is None:
            entry = await CounterCache.recompute(session, target)
        return StatsSnapshot.from_entry(target, entry)

    @staticmethod
    async def refresh(session: AsyncSession, target: TargetRef) -> bool:
        """
        变更后刷新缓存

        调用方的变更在此之前已提交；重算在独立事务中进行，失败时回滚并记录警告，
        不会影响已经成功的变更。

        Returns:
            是否刷新成功
        """
        try:
            await CounterCache.recompute(session, target)
            await session.commit()
            return True
        except Exception as e:
            await session.rollback()
            logger.warning(f"⚠️  Stats recompute failed for {target}: {type(e).__name__}: {e}")
            return False


# 全局计数缓存实例
counter_cache = CounterCache()
