"""
文章表 ORM 模型
"""

from sqlalchemy import Column, String, Text, Boolean, JSON, TIMESTAMP, ForeignKey, Index
from datetime import datetime

from socialfeed.db.base import Base


class Article(Base):
    """博客文章表"""
    __tablename__ = "articles"

    # 主键
    id = Column(String(64), primary_key=True, comment="文章ID")

    # 外键
    author_id = Column(String(64), ForeignKey("users.id"), nullable=False, comment="作者")

    # 内容
    title = Column(String(256), nullable=False, comment="标题")
    content = Column(Text, nullable=False, comment="HTML 正文")
    summary = Column(Text, nullable=False, default="", comment="摘要")
    tags = Column(JSON, nullable=False, default=list, comment="标签")

    # 状态
    published = Column(Boolean, nullable=False, default=False, comment="是否已发布")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow, comment="更新时间")

    __table_args__ = (
        Index('idx_articles_author', 'author_id'),
        Index('idx_articles_published', 'published', 'created_at', postgresql_ops={'created_at': 'DESC'}),
    )
