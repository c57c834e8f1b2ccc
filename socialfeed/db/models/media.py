"""
媒体表 ORM 模型
"""

from sqlalchemy import Column, String, Text, Integer, Boolean, JSON, TIMESTAMP, ForeignKey, Index
from datetime import datetime

from socialfeed.db.base import Base


class Media(Base):
    """媒体库表（文件本身由上传服务存储）"""
    __tablename__ = "media"

    # 主键
    id = Column(String(64), primary_key=True, comment="媒体ID")

    # 外键
    uploaded_by = Column(String(64), ForeignKey("users.id"), nullable=False, comment="上传者")

    # 基本信息
    title = Column(String(256), nullable=False, comment="标题")
    description = Column(Text, nullable=False, default="", comment="描述")
    tags = Column(JSON, nullable=False, default=list, comment="标签")

    # 文件描述
    filename = Column(String(256), nullable=False, comment="服务器文件名")
    original_name = Column(String(256), nullable=False, comment="原始文件名")
    url = Column(String(512), nullable=False, comment="访问地址")
    mimetype = Column(String(128), nullable=False, comment="MIME 类型")
    size = Column(Integer, nullable=False, default=0, comment="文件大小（字节）")
    media_type = Column(String(20), nullable=False, comment="类别（image/video/audio/document）")

    # 状态
    is_public = Column(Boolean, nullable=False, default=True, comment="是否公开")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow, comment="更新时间")

    __table_args__ = (
        Index('idx_media_uploader_type', 'uploaded_by', 'media_type'),
        Index('idx_media_public', 'is_public', 'created_at', postgresql_ops={'created_at': 'DESC'}),
    )
