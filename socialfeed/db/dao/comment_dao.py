"""
评论数据访问对象
"""

from typing import Optional, List, Tuple
from sqlalchemy import select, func, and_, update
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import datetime

from socialfeed.db.models.comment import Comment
from socialfeed.db.models.user import User
from socialfeed.models.target import TargetRef
from socialfeed.utils.id_generator import generate_comment_id


def _visible_on(target: TargetRef):
    return and_(
        Comment.target_type == target.kind.value,
        Comment.target_id == target.id,
        Comment.is_deleted.is_(False)
    )


def _thread_filter(target: TargetRef, parent_id: Optional[str]):
    if parent_id:
        return and_(_visible_on(target), Comment.parent_comment_id == parent_id)
    return and_(_visible_on(target), Comment.parent_comment_id.is_(None))


class CommentDAO:
    """评论 DAO"""

    @staticmethod
    async def create(
        session: AsyncSession,
        author_id: str,
        target: TargetRef,
        content: str,
        parent_id: Optional[str] = None
    ) -> Comment:
        """
        创建评论

        Args:
            session: 数据库会话
            author_id: 评论用户ID
            target: 评论目标
            content: 评论内容
            parent_id: 父评论ID（回复）

        Returns:
            Comment: 新创建的评论对象
        """
        comment = Comment(
            id=generate_comment_id(),
            author_id=author_id,
            target_type=target.kind.value,
            target_id=target.id,
            content=content,
            parent_comment_id=parent_id,
            likes_count=0,
            replies_count=0,
        )

        session.add(comment)
        await session.flush()

        return comment

    @staticmethod
    async def get_by_id(
        session: AsyncSession,
        comment_id: str,
        include_deleted: bool = False
    ) -> Optional[Comment]:
        """根据ID获取评论（默认排除已删除）"""
        query = select(Comment).where(Comment.id == comment_id)
        if not include_deleted:
            query = query.where(Comment.is_deleted.is_(False))

        result = await session.execute(query)
        return result.scalar_one_or_none()

    @staticmethod
    async def count_visible(session: AsyncSession, target: TargetRef) -> int:
        """统计目标下未删除的评论数（含回复）"""
        result = await session.execute(
            select(func.count(Comment.id)).where(_visible_on(target))
        )
        return result.scalar() or 0

    @staticmethod
    async def list_thread(
        session: AsyncSession,
        target: TargetRef,
        parent_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[Tuple[Comment, Optional[User]]]:
        """
        获取评论列表

        parent_id 为空时返回顶级评论，否则返回该评论的回复；按时间倒序
        """
        result = await session.execute(
            select(Comment, User)
            .outerjoin(User, Comment.author_id == User.id)
            .where(_thread_filter(target, parent_id))
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return [(comment, author) for comment, author in result.all()]

    @staticmethod
    async def count_thread(
        session: AsyncSession,
        target: TargetRef,
        parent_id: Optional[str] = None
    ) -> int:
        """统计 list_thread 的总数"""
        result = await session.execute(
            select(func.count(Comment.id)).where(_thread_filter(target, parent_id))
        )
        return result.scalar() or 0

    @staticmethod
    async def increment_replies(session: AsyncSession, parent_id: str) -> None:
        """父评论回复数 +1（数据库端原子自增）"""
        await session.execute(
            update(Comment)
            .where(Comment.id == parent_id)
            .values(replies_count=Comment.replies_count + 1)
        )

    @staticmethod
    async def set_likes_count(session: AsyncSession, comment_id: str, likes_count: int) -> None:
        """写入评论的点赞数缓存"""
        await session.execute(
            update(Comment)
            .where(Comment.id == comment_id)
            .values(likes_count=likes_count)
        )

    @staticmethod
    async def update_content(session: AsyncSession, comment: Comment, content: str) -> Comment:
        """修改评论内容"""
        comment.content = content
        comment.is_edited = True
        comment.edited_at = datetime.utcnow()
        await session.flush()
        return comment

    @staticmethod
    async def soft_delete(session: AsyncSession, comment: Comment) -> Comment:
        """
        软删除评论

        只打删除标记，保留原内容
        """
        comment.is_deleted = True
        comment.deleted_at = datetime.utcnow()
        await session.flush()
        return comment
