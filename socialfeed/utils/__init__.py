"""
工具模块
"""

from .auth import create_access_token, decode_access_token
from .id_generator import generate_ulid, generate_comment_id, generate_like_id
from .pagination import normalize_page, page_count

__all__ = [
    # 认证工具
    "create_access_token",
    "decode_access_token",

    # ID 生成器
    "generate_ulid",
    "generate_comment_id",
    "generate_like_id",

    # 分页
    "normalize_page",
    "page_count",
]
