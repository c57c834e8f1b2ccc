"""
内容统计数据访问对象
"""

from datetime import datetime
from typing import Dict, Iterable, Optional

from sqlalchemy import select, and_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.db.models.content_stats import ContentStats
from socialfeed.models.target import TargetRef

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class StatsDAO:
    """内容统计 DAO"""

    @staticmethod
    async def get(session: AsyncSession, target: TargetRef) -> Optional[ContentStats]:
        """获取目标的统计记录"""
        result = await session.execute(
            select(ContentStats)
            .where(
                and_(
                    ContentStats.content_type == target.kind.value,
                    ContentStats.content_id == target.id
                )
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_many(
        session: AsyncSession,
        content_type: str,
        content_ids: Iterable[str]
    ) -> Dict[str, ContentStats]:
        """批量获取统计记录，返回 {content_id: ContentStats}"""
        ids = list(content_ids)
        if not ids:
            return {}

        result = await session.execute(
            select(ContentStats).where(
                and_(
                    ContentStats.content_type == content_type,
                    ContentStats.content_id.in_(ids)
                )
            )
        )
        return {stats.content_id: stats for stats in result.scalars().all()}

    @staticmethod
    async def upsert_counts(
        session: AsyncSession,
        target: TargetRef,
        likes_count: int,
        comments_count: int
    ) -> ContentStats:
        """
        写入点赞数/评论数

        使用 INSERT ... ON CONFLICT DO UPDATE，以 (content_type, content_id) 为键，
        浏览数与分享数保持不变
        """
        dialect = session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise RuntimeError(f"Unsupported database dialect for upsert: {dialect}")

        now = datetime.utcnow()
        statement = insert(ContentStats).values(
            content_type=target.kind.value,
            content_id=target.id,
            likes_count=likes_count,
            comments_count=comments_count,
            views_count=0,
            shares_count=0,
            created_at=now,
            updated_at=now,
        )
        statement = statement.on_conflict_do_update(
            index_elements=[ContentStats.content_type, ContentStats.content_id],
            set_={
                "likes_count": likes_count,
                "comments_count": comments_count,
                "updated_at": now,
            },
        )
        await session.execute(statement)

        return await StatsDAO.get(session, target)
