"""
内容数据访问对象（文章、媒体）

按目标类型分派到对应的表，提供信息流所需的可见内容查询与存在性检查
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from sqlalchemy import and_, exists, func, literal, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.db.models.article import Article
from socialfeed.db.models.comment import Comment
from socialfeed.db.models.media import Media
from socialfeed.db.models.user import User
from socialfeed.models.target import TargetKind, TargetRef


@dataclass(frozen=True)
class ContentSource:
    """一种内容在存储层的描述"""
    model: Any
    author_column: Any
    visible: Any
    search_columns: Tuple[Any, ...]
    tags_column: Any


CONTENT_SOURCES = {
    TargetKind.ARTICLE: ContentSource(
        model=Article,
        author_column=Article.author_id,
        visible=Article.published.is_(True),
        search_columns=(Article.title, Article.summary, Article.content),
        tags_column=Article.tags,
    ),
    TargetKind.MEDIA: ContentSource(
        model=Media,
        author_column=Media.uploaded_by,
        visible=Media.is_public.is_(True),
        search_columns=(Media.title, Media.description),
        tags_column=Media.tags,
    ),
}

# 把 JSON 数组展开为逐行文本（输出列名均为 value）
_JSON_ARRAY_ELEMENTS = {
    "postgresql": func.json_array_elements_text,
    "sqlite": func.json_each,
}


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _tag_matches(source: ContentSource, pattern: str, dialect: str):
    """任一标签元素包含关键字（按元素匹配，不匹配 JSON 文本）"""
    elements = _JSON_ARRAY_ELEMENTS.get(dialect)
    if elements is None:
        raise RuntimeError(f"Unsupported database dialect for tag search: {dialect}")

    tag = elements(source.tags_column).table_valued("value").alias("tag")
    return exists(
        select(literal(1))
        .select_from(tag)
        .where(tag.c.value.ilike(pattern, escape="\\"))
    )


def _visible_filter(source: ContentSource, search: Optional[str], dialect: str):
    """可见性过滤 + 可选的关键字（不区分大小写的子串匹配）"""
    if not search or not search.strip():
        return source.visible

    pattern = f"%{_escape_like(search.strip())}%"
    return and_(
        source.visible,
        or_(
            *(column.ilike(pattern, escape="\\") for column in source.search_columns),
            _tag_matches(source, pattern, dialect),
        )
    )


def _dialect(session: AsyncSession) -> str:
    return session.get_bind().dialect.name


class ContentDAO:
    """内容 DAO"""

    @staticmethod
    async def find_visible(
        session: AsyncSession,
        kind: TargetKind,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[Tuple[Any, Optional[User]]]:
        """
        查询可见内容（已发布文章 / 公开媒体）

        Args:
            session: 数据库会话
            kind: 内容类型
            search: 搜索关键字（标题、正文/描述、标签）
            limit: 最多返回数量
            offset: 偏移量

        Returns:
            [(内容, 作者)] 列表，按创建时间倒序；作者不存在时为 None
        """
        source = CONTENT_SOURCES[kind]
        model = source.model

        result = await session.execute(
            select(model, User)
            .outerjoin(User, source.author_column == User.id)
            .where(_visible_filter(source, search, _dialect(session)))
            .order_by(model.created_at.desc(), model.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return [(content, author) for content, author in result.all()]

    @staticmethod
    async def count_visible(
        session: AsyncSession,
        kind: TargetKind,
        search: Optional[str] = None
    ) -> int:
        """统计可见内容数量"""
        source = CONTENT_SOURCES[kind]
        result = await session.execute(
            select(func.count())
            .select_from(source.model)
            .where(_visible_filter(source, search, _dialect(session)))
        )
        return result.scalar() or 0

    @staticmethod
    async def get_target(session: AsyncSession, target: TargetRef) -> Optional[Any]:
        """
        获取目标对象

        评论目标只返回未删除的评论
        """
        if target.kind == TargetKind.COMMENT:
            query = select(Comment).where(
                and_(Comment.id == target.id, Comment.is_deleted.is_(False))
            )
        else:
            model = CONTENT_SOURCES[target.kind].model
            query = select(model).where(model.id == target.id)

        result = await session.execute(query)
        return result.scalar_one_or_none()

    @staticmethod
    async def exists(session: AsyncSession, target: TargetRef) -> bool:
        """检查目标是否存在"""
        return await ContentDAO.get_target(session, target) is not None

    @staticmethod
    async def get_author(session: AsyncSession, target: TargetRef) -> Optional[User]:
        """获取目标的作者/上传者"""
        if target.kind == TargetKind.COMMENT:
            author_column, model = Comment.author_id, Comment
        else:
            source = CONTENT_SOURCES[target.kind]
            author_column, model = source.author_column, source.model

        result = await session.execute(
            select(User)
            .join(model, author_column == User.id)
            .where(model.id == target.id)
        )
        return result.scalar_one_or_none()
