"""
数据库 ORM 模型

导出所有 SQLAlchemy 模型类
"""

from socialfeed.db.base import Base

# 导入所有模型（确保 Base 知道所有表）
from .user import User
from .article import Article
from .media import Media
from .like import Like
from .comment import Comment
from .content_stats import ContentStats

__all__ = [
    # Base
    "Base",

    # Models
    "User",
    "Article",
    "Media",
    "Like",
    "Comment",
    "ContentStats",
]
