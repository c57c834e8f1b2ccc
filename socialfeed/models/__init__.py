"""
数据模型模块

导出所有 Pydantic 数据模型，用于 API 请求/响应验证
"""

# 通用响应
from .response import CamelModel, PaginationMeta, MessageResponse, ErrorResponse

# 多态目标
from .target import TargetKind, TargetRef, LIKE_TARGETS, COMMENT_TARGETS, FEED_KINDS

# 用户
from .user import UserBrief

# 信息流
from .feed import (
    FeedItem, SocialFeedStats, SocialFeedResponse,
    CurrentPageStats, UnifiedFeedStats, UnifiedFeedResponse
)

# 点赞与统计
from .interaction import (
    LikeToggleRequest, LikeToggleResponse,
    LikeEntry, LikeListResponse, StatsResponse
)

# 评论
from .comment import CommentCreate, CommentUpdate, CommentResponse, CommentListResponse

# 在线状态
from .presence import OnlineUser, OnlineUsersResponse, HeartbeatResponse

__all__ = [
    # Response
    "CamelModel",
    "PaginationMeta",
    "MessageResponse",
    "ErrorResponse",

    # Target
    "TargetKind",
    "TargetRef",
    "LIKE_TARGETS",
    "COMMENT_TARGETS",
    "FEED_KINDS",

    # User
    "UserBrief",

    # Feed
    "FeedItem",
    "SocialFeedStats",
    "SocialFeedResponse",
    "CurrentPageStats",
    "UnifiedFeedStats",
    "UnifiedFeedResponse",

    # Interaction
    "LikeToggleRequest",
    "LikeToggleResponse",
    "LikeEntry",
    "LikeListResponse",
    "StatsResponse",

    # Comment
    "CommentCreate",
    "CommentUpdate",
    "CommentResponse",
    "CommentListResponse",

    # Presence
    "OnlineUser",
    "OnlineUsersResponse",
    "HeartbeatResponse",
]
