"""
用户展示信息
"""

from typing import Optional

from pydantic import Field

from .response import CamelModel


class UserBrief(CamelModel):
    """作者/上传者/点赞用户的展示字段"""
    id: str
    name: str = ""
    email: str = ""
    avatar: str = Field("", description="头像")
    role: str = "user"

    @classmethod
    def from_user(cls, user) -> Optional["UserBrief"]:
        if user is None:
            return None
        return cls(
            id=user.id,
            name=user.name or user.email,
            email=user.email,
            avatar=user.profile_photo or "",
            role=user.role or "user",
        )
