"""
评论表 ORM 模型
"""

from sqlalchemy import Column, String, Text, Integer, Boolean, TIMESTAMP, ForeignKey, Index
from datetime import datetime

from socialfeed.db.base import Base


class Comment(Base):
    """评论表"""
    __tablename__ = "comments"

    # 主键
    id = Column(String(64), primary_key=True, comment="评论ID")

    # 外键
    author_id = Column(String(64), ForeignKey("users.id"), nullable=False, comment="评论用户")
    parent_comment_id = Column(String(64), ForeignKey("comments.id"), nullable=True, comment="父评论ID")

    # 多态目标
    target_type = Column(String(20), nullable=False, comment="目标类型（article/media）")
    target_id = Column(String(64), nullable=False, comment="目标ID")

    # 评论内容
    content = Column(Text, nullable=False, comment="评论内容（1-1000字符）")
    is_edited = Column(Boolean, nullable=False, default=False, comment="是否编辑过")
    edited_at = Column(TIMESTAMP, nullable=True, comment="编辑时间")

    # 软删除
    is_deleted = Column(Boolean, nullable=False, default=False, comment="是否已删除")
    deleted_at = Column(TIMESTAMP, nullable=True, comment="删除时间")

    # 统计
    likes_count = Column(Integer, nullable=False, default=0, comment="点赞数")
    replies_count = Column(Integer, nullable=False, default=0, comment="回复数")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow, comment="更新时间")

    __table_args__ = (
        Index('idx_comments_target', 'target_type', 'target_id', 'created_at', postgresql_ops={'created_at': 'DESC'}),
        Index('idx_comments_author', 'author_id'),
        Index('idx_comments_parent', 'parent_comment_id'),
    )
