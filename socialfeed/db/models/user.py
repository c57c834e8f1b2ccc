"""
用户表 ORM 模型
"""

from sqlalchemy import Column, String, Text, TIMESTAMP, Index
from datetime import datetime

from socialfeed.db.base import Base


class User(Base):
    """用户表（账号由认证服务维护，这里只读取展示字段）"""
    __tablename__ = "users"

    # 主键
    id = Column(String(64), primary_key=True, comment="用户ID")

    # 基本信息
    email = Column(String(128), unique=True, nullable=False, comment="邮箱")
    name = Column(String(128), nullable=False, default="", comment="姓名")
    profile_photo = Column(Text, nullable=False, default="", comment="头像（URL 或 Base64）")

    # 角色与状态
    role = Column(String(20), nullable=False, default="user", comment="角色（user/admin）")
    status = Column(String(20), nullable=False, default="active", comment="账号状态")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow, comment="更新时间")

    __table_args__ = (
        Index('idx_users_role', 'role'),
    )
