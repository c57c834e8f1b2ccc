"""
评论服务

处理评论相关业务逻辑
"""

from typing import Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.config.settings import settings
from socialfeed.db.dao import CommentDAO, ContentDAO, LikeDAO, UserDAO
from socialfeed.db.models.comment import Comment
from socialfeed.errors import Forbidden, NotFound, ValidationError
from socialfeed.models import (
    CommentListResponse, CommentResponse, PaginationMeta, TargetRef, UserBrief
)
from socialfeed.models.target import COMMENT_TARGETS, TargetKind
from socialfeed.services.counter_cache import CounterCache
from socialfeed.utils.pagination import page_count


def _validate_content(content: Optional[str]) -> str:
    if not content or not content.strip():
        raise ValidationError("Comment content is required")

    max_length = settings.COMMENT_MAX_LENGTH
    if len(content) > max_length:
        raise ValidationError(f"Comment too long (max {max_length} characters)")

    return content


def _to_response(comment: Comment, author=None, is_liked: bool = False) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        content=comment.content,
        target_type=comment.target_type,
        target_id=comment.target_id,
        parent_comment_id=comment.parent_comment_id,
        author=UserBrief.from_user(author),
        likes_count=comment.likes_count,
        replies_count=comment.replies_count,
        is_liked=is_liked,
        is_edited=comment.is_edited,
        edited_at=comment.edited_at,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


class CommentService:
    """评论服务"""

    @staticmethod
    async def create_comment(
        session: AsyncSession,
        author_id: str,
        target_type: Optional[str],
        target_id: Optional[str],
        content: Optional[str],
        parent_comment_id: Optional[str] = None
    ) -> CommentResponse:
        """
        发表评论

        Args:
            session: 数据库会话
            author_id: 评论用户ID
            target_type: 目标类型（article/media）
            target_id: 目标ID
            content: 评论内容（1-1000字符）
            parent_comment_id: 父评论ID（回复，仅支持一层）

        Returns:
            新创建的评论（含作者信息）
        """
        target = TargetRef.parse(target_type, target_id, COMMENT_TARGETS)
        content = _validate_content(content)

        if not await ContentDAO.exists(session, target):
            raise NotFound("Content not found")

        # 如果是回复，验证父评论
        if parent_comment_id:
            parent = await CommentDAO.get_by_id(session, parent_comment_id)
            if not parent:
                raise NotFound("Parent comment not found")

            if parent.target_type != target.kind.value or parent.target_id != target.id:
                raise ValidationError("Parent comment belongs to another content")

            # 不允许回复的回复
            if parent.parent_comment_id is not None:
                raise ValidationError("Cannot reply to a reply")

        comment = await CommentDAO.create(
            session, author_id, target, content, parent_comment_id or None
        )

        if parent_comment_id:
            await CommentDAO.increment_replies(session, parent_comment_id)

        await session.commit()

        # 刷新失败会回滚会话并使已加载对象过期，先构造响应
        author = await UserDAO.get_by_id(session, author_id)
        response = _to_response(comment, author)

        await CounterCache.refresh(session, target)
        logger.info(f"💬 New comment on {target} by user {author_id}")

        return response

    @staticmethod
    async def get_comments(
        session: AsyncSession,
        viewer_id: str,
        target_type: Optional[str],
        target_id: Optional[str],
        page: int = 1,
        limit: int = 20,
        parent_id: Optional[str] = None
    ) -> CommentListResponse:
        """
        获取评论列表

        未指定 parent_id 时返回顶级评论，否则返回该评论的回复；已删除评论不返回
        """
        target = TargetRef.parse(target_type, target_id, COMMENT_TARGETS)
        if parent_id == "null":
            parent_id = None

        rows = await CommentDAO.list_thread(session, target, parent_id, limit, (page - 1) * limit)
        total = await CommentDAO.count_thread(session, target, parent_id)
        liked_ids = await LikeDAO.liked_target_ids(
            session, viewer_id, TargetKind.COMMENT.value, [comment.id for comment, _ in rows]
        )

        return CommentListResponse(
            comments=[
                _to_response(comment, author, comment.id in liked_ids)
                for comment, author in rows
            ],
            total_comments=total,
            pagination=PaginationMeta(
                page=page, limit=limit, total=total, pages=page_count(total, limit)
            ),
        )

    @staticmethod
    async def _get_own_comment(session: AsyncSession, comment_id: str, user_id: str) -> Comment:
        comment = await CommentDAO.get_by_id(session, comment_id)
        if not comment:
            raise NotFound("Comment not found")

        if comment.author_id != user_id:
            raise Forbidden("You can only modify your own comments")

        return comment

    @staticmethod
    async def edit_comment(
        session: AsyncSession,
        user_id: str,
        comment_id: str,
        content: Optional[str]
    ) -> CommentResponse:
        """
        修改评论

        - 仅评论作者可修改
        - 标记 is_edited
        """
        content = _validate_content(content)
        comment = await CommentService._get_own_comment(session, comment_id, user_id)

        await CommentDAO.update_content(session, comment, content)
        await session.commit()

        author = await UserDAO.get_by_id(session, user_id)
        return _to_response(comment, author)

    @staticmethod
    async def delete_comment(
        session: AsyncSession,
        user_id: str,
        comment_id: str
    ) -> None:
        """
        删除评论（软删除）

        - 仅评论作者可删除
        - 保留内容，只打删除标记，并重算目标的评论数
        """
        comment = await CommentService._get_own_comment(session, comment_id, user_id)

        target = TargetRef(TargetKind(comment.target_type), comment.target_id)

        await CommentDAO.soft_delete(session, comment)
        await session.commit()

        await CounterCache.refresh(session, target)

        logger.info(f"🗑️  Comment {comment_id} deleted by user {user_id}")


# 全局评论服务实例
comment_service = CommentService()
