"""
信息流数据模型
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .response import CamelModel, PaginationMeta
from .user import UserBrief


class FeedItem(CamelModel):
    """信息流条目（文章或媒体 + 互动统计）"""
    id: str
    feed_type: str = Field(..., description="article / media")
    title: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    author: Optional[UserBrief] = None

    likes_count: int = 0
    comments_count: int = 0
    views_count: int = 0
    is_liked: bool = False

    tags: List[str] = Field(default_factory=list)

    # 文章字段
    summary: Optional[str] = None
    content: Optional[str] = Field(None, description="正文预览")

    # 媒体字段
    description: Optional[str] = None
    url: Optional[str] = None
    mimetype: Optional[str] = None
    media_type: Optional[str] = None


class SocialFeedStats(CamelModel):
    """本页各类型条目数"""
    articles: int
    medias: int


class SocialFeedResponse(CamelModel):
    """社交信息流响应"""
    feed: List[FeedItem]
    pagination: PaginationMeta
    stats: SocialFeedStats


class CurrentPageStats(CamelModel):
    articles: int
    medias: int
    blogs: int = 0


class UnifiedFeedStats(CamelModel):
    total_articles: int
    total_medias: int
    total_blogs: int = 0
    current_page: CurrentPageStats


class UnifiedFeedResponse(CamelModel):
    """统一信息流响应（合并分页后按类型拆分）"""
    articles: List[FeedItem]
    medias: List[FeedItem]
    blogs: List[FeedItem] = Field(default_factory=list)
    pagination: PaginationMeta
    stats: UnifiedFeedStats
