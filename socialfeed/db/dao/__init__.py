"""
数据访问对象（DAO）层

封装数据库操作，提供给服务层使用
"""

from .user_dao import UserDAO
from .content_dao import ContentDAO
from .like_dao import LikeDAO
from .comment_dao import CommentDAO
from .stats_dao import StatsDAO

__all__ = [
    "UserDAO",
    "ContentDAO",
    "LikeDAO",
    "CommentDAO",
    "StatsDAO",
]
