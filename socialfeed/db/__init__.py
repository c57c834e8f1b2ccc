"""
数据库模块

包含 SQLAlchemy ORM 模型、数据库连接管理等
"""

from .base import Base, get_db, get_session_factory, init_db, close_db

__all__ = [
    "Base",
    "get_db",
    "get_session_factory",
    "init_db",
    "close_db",
]
