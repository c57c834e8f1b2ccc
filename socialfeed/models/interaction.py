"""
点赞与统计数据模型
"""

from datetime import datetime
from typing import List, Optional

from .response import CamelModel, PaginationMeta
from .user import UserBrief


class LikeToggleRequest(CamelModel):
    """点赞/取消点赞请求"""
    target_type: Optional[str] = None
    target_id: Optional[str] = None


class LikeToggleResponse(CamelModel):
    """点赞切换结果（likes_count 读取自计数缓存）"""
    message: str
    action: str
    likes_count: int
    is_liked: bool


class LikeEntry(CamelModel):
    id: str
    created_at: datetime
    user: Optional[UserBrief] = None


class LikeListResponse(CamelModel):
    likes: List[LikeEntry]
    total_likes: int
    is_liked: bool
    pagination: PaginationMeta


class StatsResponse(CamelModel):
    """内容统计 + 当前用户点赞状态"""
    content_type: str
    content_id: str
    likes_count: int = 0
    comments_count: int = 0
    views_count: int = 0
    shares_count: int = 0
    is_liked: bool = False
    updated_at: Optional[datetime] = None
