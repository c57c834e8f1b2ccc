"""
内容统计表 ORM 模型（互动计数缓存）
"""

from sqlalchemy import Column, String, Integer, TIMESTAMP
from datetime import datetime

from socialfeed.db.base import Base


class ContentStats(Base):
    """内容统计缓存表，每个 (content_type, content_id) 一行"""
    __tablename__ = "content_stats"

    # 联合主键
    content_type = Column(String(20), primary_key=True, comment="内容类型")
    content_id = Column(String(64), primary_key=True, comment="内容ID")

    # 计数
    likes_count = Column(Integer, nullable=False, default=0, comment="有效点赞数")
    comments_count = Column(Integer, nullable=False, default=0, comment="未删除评论数")
    views_count = Column(Integer, nullable=False, default=0, comment="浏览数")
    shares_count = Column(Integer, nullable=False, default=0, comment="分享数")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow, comment="更新时间")
