"""
点赞表 ORM 模型
"""

from sqlalchemy import Column, String, Boolean, TIMESTAMP, ForeignKey, Index, UniqueConstraint
from datetime import datetime

from socialfeed.db.base import Base


class Like(Base):
    """点赞表（目标为 article/media/comment，取消点赞只翻转 is_active）"""
    __tablename__ = "likes"

    # 主键
    id = Column(String(64), primary_key=True, comment="点赞ID")

    # 外键
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, comment="点赞用户")

    # 多态目标
    target_type = Column(String(20), nullable=False, comment="目标类型")
    target_id = Column(String(64), nullable=False, comment="目标ID")

    # 状态
    is_active = Column(Boolean, nullable=False, default=True, comment="是否有效")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow, comment="更新时间")

    __table_args__ = (
        UniqueConstraint('user_id', 'target_type', 'target_id', name='uq_likes_user_target'),
        Index('idx_likes_target', 'target_type', 'target_id'),
        Index('idx_likes_user', 'user_id'),
    )
