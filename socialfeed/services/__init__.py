"""
业务服务层
"""

from .counter_cache import counter_cache, CounterCache, StatsSnapshot
from .feed_service import feed_service, FeedService
from .interaction_service import interaction_service, InteractionService
from .comment_service import comment_service, CommentService
from .presence_service import PresenceStore

__all__ = [
    # 计数缓存
    "CounterCache",
    "StatsSnapshot",
    # 信息流
    "FeedService",
    # 互动服务
    "InteractionService",
    "CommentService",
    # 在线状态
    "PresenceStore",
    # 全局服务实例
    "counter_cache",
    "feed_service",
    "interaction_service",
    "comment_service",
]
