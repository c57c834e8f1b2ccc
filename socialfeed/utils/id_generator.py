"""
ID 生成器

提供各种实体的唯一 ID 生成功能
"""

import ulid


def generate_ulid() -> str:
    """
    生成 ULID（Universally Unique Lexicographically Sortable Identifier）

    特点：
    - 按时间排序
    - 规范化的字符串表示（26个字符）

    Returns:
        ULID 字符串
    """
    return str(ulid.new())


def generate_user_id() -> str:
    """用户 ID，格式：user_<ulid>"""
    return f"user_{generate_ulid()}"


def generate_article_id() -> str:
    """文章 ID，格式：article_<ulid>"""
    return f"article_{generate_ulid()}"


def generate_media_id() -> str:
    """媒体 ID，格式：media_<ulid>"""
    return f"media_{generate_ulid()}"


def generate_like_id() -> str:
    """点赞 ID，格式：like_<ulid>"""
    return f"like_{generate_ulid()}"


def generate_comment_id() -> str:
    """
    生成评论 ID

    格式：comment_<ulid>
    示例：comment_01ARZ3NDEKTSV4RRFFQ69G5FAV

    Returns:
        评论 ID
    """
    return f"comment_{generate_ulid()}"
