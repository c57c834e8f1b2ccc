"""
多态目标（点赞/评论/统计所指向的内容）
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional

from socialfeed.errors import InvalidTarget, ValidationError


class TargetKind(str, Enum):
    """目标类型"""
    ARTICLE = "article"
    MEDIA = "media"
    COMMENT = "comment"


# 可点赞的目标
LIKE_TARGETS: FrozenSet[TargetKind] = frozenset(
    {TargetKind.ARTICLE, TargetKind.MEDIA, TargetKind.COMMENT}
)
# 可评论的目标
COMMENT_TARGETS: FrozenSet[TargetKind] = frozenset({TargetKind.ARTICLE, TargetKind.MEDIA})
# 信息流中的内容类型（顺序即同一时间戳下的合并顺序）
FEED_KINDS = (TargetKind.ARTICLE, TargetKind.MEDIA)


@dataclass(frozen=True)
class TargetRef:
    """(kind, id) 形式的目标引用"""
    kind: TargetKind
    id: str

    @classmethod
    def parse(
        cls,
        kind: Optional[str],
        target_id: Optional[str],
        allowed: FrozenSet[TargetKind] = LIKE_TARGETS
    ) -> "TargetRef":
        """
        校验并构造目标引用

        Raises:
            ValidationError: 缺少 targetType 或 targetId
            InvalidTarget: 类型不在 allowed 中
        """
        if not kind or not target_id:
            raise ValidationError("targetType and targetId are required")

        try:
            target_kind = TargetKind(kind)
        except ValueError:
            raise InvalidTarget(f"Invalid targetType: {kind}")

        if target_kind not in allowed:
            raise InvalidTarget(f"Invalid targetType: {kind}")

        return cls(target_kind, target_id)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"
