"""
点赞数据访问对象
"""

from typing import Iterable, List, Optional, Set, Tuple
from sqlalchemy import select, func, and_
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.db.models.like import Like
from socialfeed.db.models.user import User
from socialfeed.models.target import TargetRef
from socialfeed.utils.id_generator import generate_like_id


def _target_filter(target: TargetRef):
    return and_(Like.target_type == target.kind.value, Like.target_id == target.id)


class LikeDAO:
    """点赞 DAO"""

    @staticmethod
    async def get(session: AsyncSession, user_id: str, target: TargetRef) -> Optional[Like]:
        """获取用户对目标的点赞记录（无论是否有效）"""
        result = await session.execute(
            select(Like).where(and_(Like.user_id == user_id, _target_filter(target)))
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, user_id: str, target: TargetRef) -> Like:
        """
        创建有效点赞

        (user_id, target_type, target_id) 有唯一约束，并发重复创建时 flush 抛出 IntegrityError
        """
        like = Like(
            id=generate_like_id(),
            user_id=user_id,
            target_type=target.kind.value,
            target_id=target.id,
            is_active=True,
        )

        session.add(like)
        await session.flush()

        return like

    @staticmethod
    async def count_active(session: AsyncSession, target: TargetRef) -> int:
        """统计目标的有效点赞数"""
        result = await session.execute(
            select(func.count(Like.id)).where(and_(_target_filter(target), Like.is_active.is_(True)))
        )
        return result.scalar() or 0

    @staticmethod
    async def is_liked(session: AsyncSession, user_id: str, target: TargetRef) -> bool:
        """用户是否对目标有有效点赞"""
        like = await LikeDAO.get(session, user_id, target)
        return bool(like and like.is_active)

    @staticmethod
    async def liked_target_ids(
        session: AsyncSession,
        user_id: str,
        target_type: str,
        target_ids: Iterable[str]
    ) -> Set[str]:
        """批量查询用户有效点赞过的目标ID"""
        ids = list(target_ids)
        if not ids:
            return set()

        result = await session.execute(
            select(Like.target_id).where(
                and_(
                    Like.user_id == user_id,
                    Like.target_type == target_type,
                    Like.target_id.in_(ids),
                    Like.is_active.is_(True)
                )
            )
        )
        return set(result.scalars().all())

    @staticmethod
    async def list_active(
        session: AsyncSession,
        target: TargetRef,
        limit: int = 20,
        offset: int = 0
    ) -> List[Tuple[Like, Optional[User]]]:
        """获取目标的有效点赞列表（含用户），按时间倒序"""
        result = await session.execute(
            select(Like, User)
            .outerjoin(User, Like.user_id == User.id)
            .where(and_(_target_filter(target), Like.is_active.is_(True)))
            .order_by(Like.updated_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [(like, user) for like, user in result.all()]
