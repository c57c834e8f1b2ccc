"""
分页参数处理
"""

import math
from typing import Optional, Tuple, Union

from socialfeed.config.settings import settings

DEFAULT_PAGE = 1


def _to_positive_int(value: Union[str, int, None]) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    return number if number > 0 else None


def normalize_page(
    page: Union[str, int, None],
    limit: Union[str, int, None]
) -> Tuple[int, int]:
    """
    规范化分页参数

    非数字或非正数回退为默认值（page=1, limit=DEFAULT_PAGE_SIZE），
    limit 不超过 MAX_PAGE_SIZE，不会抛出异常。

    Returns:
        (page, limit)
    """
    page_num = _to_positive_int(page) or DEFAULT_PAGE
    limit_num = _to_positive_int(limit) or settings.DEFAULT_PAGE_SIZE
    return page_num, min(limit_num, settings.MAX_PAGE_SIZE)


def page_count(total: int, limit: int) -> int:
    """总页数"""
    return math.ceil(total / limit) if limit else 0
