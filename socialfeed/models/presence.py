"""
在线状态数据模型
"""

from datetime import datetime
from typing import List

from .response import CamelModel
from .user import UserBrief


class OnlineUser(UserBrief):
    last_seen: datetime


class OnlineUsersResponse(CamelModel):
    users: List[OnlineUser]
    count: int


class HeartbeatResponse(CamelModel):
    message: str
    timestamp: datetime
