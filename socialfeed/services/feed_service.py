"""
信息流聚合服务

合并文章与媒体两类内容：各类型按配置比例分别取一段候选，
关联作者、计数缓存与当前用户的点赞状态后按创建时间倒序合并，再切出请求的页。

- 各类型在独立会话中并发查询，任一类型失败则整个请求失败
- 先统计各类型总数；请求页超出末尾时直接返回空页，候选数量不超过该类型总数
- 只读，不写计数缓存
- 某一类型内容稀少时当前页可能不满，不做二次补齐
- 分页基于合并后的序列而不是游标，翻页期间新增内容会导致页间成员变化
"""

import asyncio
import math
import re
from dataclasses import dataclass, field
from typing import Awaitable, Dict, Iterable, List, Optional, Sequence

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from socialfeed.config.settings import settings
from socialfeed.db.dao import ContentDAO, LikeDAO, StatsDAO
from socialfeed.errors import InternalError
from socialfeed.models import (
    CurrentPageStats, FeedItem, PaginationMeta, SocialFeedResponse,
    SocialFeedStats, UnifiedFeedResponse, UnifiedFeedStats, UserBrief
)
from socialfeed.models.target import FEED_KINDS, TargetKind
from socialfeed.utils.pagination import page_count

_TAG_RE = re.compile(r"<[^>]+>")


@dataclass
class KindSlice:
    """单一类型的查询结果"""
    kind: TargetKind
    items: List[FeedItem]
    total: int


@dataclass
class FeedPage:
    """合并分页后的结果"""
    items: List[FeedItem]
    page: int
    limit: int
    total: int
    fetched: Dict[TargetKind, int] = field(default_factory=dict)
    totals: Dict[TargetKind, int] = field(default_factory=dict)

    @property
    def pages(self) -> int:
        return page_count(self.total, self.limit)

    @property
    def has_more(self) -> bool:
        return self.page * self.limit < self.total

    def pagination(self) -> PaginationMeta:
        return PaginationMeta(
            page=self.page,
            limit=self.limit,
            total=self.total,
            pages=self.pages,
            has_more=self.has_more,
        )

    def of_kind(self, kind: TargetKind) -> List[FeedItem]:
        return [item for item in self.items if item.feed_type == kind.value]


def fetch_limit(page: int, limit: int, ratio: float) -> int:
    """某类型需要取回的候选数量：覆盖到请求页末尾的 ratio 份额"""
    return max(0, math.ceil(page * limit * ratio))


async def _gather_or_fail(aws: Iterable[Awaitable]) -> list:
    """并发执行，全部结束后再处理失败；数据库错误转换为 InternalError"""
    results = await asyncio.gather(*aws, return_exceptions=True)

    for result in results:
        if isinstance(result, SQLAlchemyError):
            logger.error(f"❌ Feed query failed: {type(result).__name__}: {result}")
            raise InternalError("Failed to load feed") from result
        if isinstance(result, BaseException):
            raise result
    return list(results)


def _preview(html: Optional[str], length: int) -> str:
    text = _TAG_RE.sub("", html or "")
    return text[:length]


def _to_feed_item(kind: TargetKind, content, author, stats, is_liked: bool) -> FeedItem:
    item = FeedItem(
        id=content.id,
        feed_type=kind.value,
        title=content.title,
        created_at=content.created_at,
        updated_at=content.updated_at,
        author=UserBrief.from_user(author),
        likes_count=stats.likes_count if stats else 0,
        comments_count=stats.comments_count if stats else 0,
        views_count=stats.views_count if stats else 0,
        is_liked=is_liked,
        tags=list(content.tags or []),
    )

    if kind == TargetKind.ARTICLE:
        item.summary = content.summary
        item.content = _preview(content.content, settings.FEED_PREVIEW_LENGTH)
    else:
        item.description = content.description
        item.url = content.url
        item.mimetype = content.mimetype
        item.media_type = content.media_type

    return item


class FeedService:
    """信息流聚合服务"""

    @staticmethod
    async def _count_kind(session_factory, kind: TargetKind, search: Optional[str]) -> int:
        async with session_factory() as session:
            return await ContentDAO.count_visible(session, kind, search)

    @staticmethod
    async def _fetch_kind(
        session_factory,
        kind: TargetKind,
        viewer_id: Optional[str],
        search: Optional[str],
        limit: int,
        total: int
    ) -> KindSlice:
        """查询单一类型的候选条目并补齐作者、计数与点赞状态"""
        if limit <= 0:
            return KindSlice(kind=kind, items=[], total=total)

        async with session_factory() as session:
            rows = await ContentDAO.find_visible(session, kind, search, limit=limit)

            ids = [content.id for content, _ in rows]
            stats = await StatsDAO.get_many(session, kind.value, ids)
            liked_ids = set()
            if viewer_id:
                liked_ids = await LikeDAO.liked_target_ids(session, viewer_id, kind.value, ids)

        items = [
            _to_feed_item(kind, content, author, stats.get(content.id), content.id in liked_ids)
            for content, author in rows
        ]
        return KindSlice(kind=kind, items=items, total=total)

    @staticmethod
    async def build_feed(
        session_factory,
        viewer_id: Optional[str],
        page: int,
        limit: int,
        search: Optional[str] = None,
        kinds: Sequence[TargetKind] = FEED_KINDS,
        split_ratio: Optional[Dict[str, float]] = None
    ) -> FeedPage:
        """
        聚合信息流

        Args:
            session_factory: 会话工厂（每种类型独立会话）
            viewer_id: 当前用户ID，为空时 is_liked 全为 False
            page: 页码（从1开始）
            limit: 每页数量
            search: 搜索关键字
            kinds: 启用的内容类型
            split_ratio: 各类型比例，默认取配置

        Returns:
            FeedPage

        Raises:
            InternalError: 任一类型查询失败
        """
        ratio = split_ratio or settings.FEED_SPLIT_RATIO
        enabled = [kind for kind in FEED_KINDS if kind in kinds]

        counts = await _gather_or_fail(
            FeedService._count_kind(session_factory, kind, search) for kind in enabled
        )
        totals = dict(zip(enabled, counts))
        total = sum(counts)

        start = (page - 1) * limit
        if start >= total:
            return FeedPage(
                items=[], page=page, limit=limit, total=total,
                fetched={kind: 0 for kind in enabled}, totals=totals,
            )

        # start < total，因此 page * limit 不超过 total + limit
        slices: List[KindSlice] = await _gather_or_fail(
            FeedService._fetch_kind(
                session_factory, kind, viewer_id, search,
                min(fetch_limit(page, limit, ratio.get(kind.value, 0.0)), totals[kind]),
                totals[kind]
            )
            for kind in enabled
        )

        merged: List[FeedItem] = []
        for kind_slice in slices:
            merged.extend(kind_slice.items)
        # sorted 是稳定排序，相同时间保持类型顺序与各自查询顺序
        merged = sorted(merged, key=lambda item: item.created_at, reverse=True)

        page_items = merged[start:start + limit]

        return FeedPage(
            items=page_items,
            page=page,
            limit=limit,
            total=total,
            fetched={kind_slice.kind: len(kind_slice.items) for kind_slice in slices},
            totals=totals,
        )

    @staticmethod
    async def get_social_feed(
        session_factory,
        viewer_id: str,
        page: int = 1,
        limit: int = 20
    ) -> SocialFeedResponse:
        """
        社交信息流（文章 + 媒体，含作者与互动统计）
        """
        feed = await FeedService.build_feed(session_factory, viewer_id, page, limit)

        logger.info(
            f"✅ Social feed for {viewer_id}: "
            f"{feed.fetched.get(TargetKind.ARTICLE, 0)} articles + "
            f"{feed.fetched.get(TargetKind.MEDIA, 0)} medias = {len(feed.items)} items"
        )

        return SocialFeedResponse(
            feed=feed.items,
            pagination=feed.pagination(),
            stats=SocialFeedStats(
                articles=len(feed.of_kind(TargetKind.ARTICLE)),
                medias=len(feed.of_kind(TargetKind.MEDIA)),
            ),
        )

    @staticmethod
    async def get_unified_feed(
        session_factory,
        viewer_id: str,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        include_articles: bool = True,
        include_media: bool = True
    ) -> UnifiedFeedResponse:
        """
        统一信息流

        合并分页后按类型拆分返回；blogs 保留为空列表
        """
        kinds = [
            kind for kind, enabled in (
                (TargetKind.ARTICLE, include_articles),
                (TargetKind.MEDIA, include_media),
            )
            if enabled
        ]
        feed = await FeedService.build_feed(session_factory, viewer_id, page, limit, search, kinds)

        articles = feed.of_kind(TargetKind.ARTICLE)
        medias = feed.of_kind(TargetKind.MEDIA)

        logger.info(f"✅ Unified feed: {len(articles)} articles + {len(medias)} medias (search={search!r})")

        return UnifiedFeedResponse(
            articles=articles,
            medias=medias,
            blogs=[],
            pagination=feed.pagination(),
            stats=UnifiedFeedStats(
                total_articles=feed.totals.get(TargetKind.ARTICLE, 0),
                total_medias=feed.totals.get(TargetKind.MEDIA, 0),
                total_blogs=0,
                current_page=CurrentPageStats(articles=len(articles), medias=len(medias), blogs=0),
            ),
        )

    @staticmethod
    async def get_public_feed(
        session_factory,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None
    ) -> SocialFeedResponse:
        """公开信息流（无需登录，is_liked 恒为 False）"""
        feed = await FeedService.build_feed(session_factory, None, page, limit, search)

        return SocialFeedResponse(
            feed=feed.items,
            pagination=feed.pagination(),
            stats=SocialFeedStats(
                articles=len(feed.of_kind(TargetKind.ARTICLE)),
                medias=len(feed.of_kind(TargetKind.MEDIA)),
            ),
        )


# 全局信息流服务实例
feed_service = FeedService()
