"""
在线状态路由
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.api.deps import get_current_user, get_db_session, get_presence_store
from socialfeed.db.dao import UserDAO
from socialfeed.models import HeartbeatResponse, OnlineUsersResponse, UserBrief
from socialfeed.services.presence_service import PresenceStore

router = APIRouter()


@router.put("/heartbeat", response_model=HeartbeatResponse)
async def heartbeat(
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
    presence: PresenceStore = Depends(get_presence_store)
):
    """
    在线心跳

    - 客户端定期调用，超过 TTL 未调用视为离线
    """
    user = await UserDAO.get_by_id(session, current_user["user_id"])
    brief = UserBrief.from_user(user) or UserBrief(
        id=current_user["user_id"], name=current_user["username"]
    )

    timestamp = presence.touch(brief)
    return HeartbeatResponse(message="Heartbeat received", timestamp=timestamp)


@router.get("/online", response_model=OnlineUsersResponse)
async def get_online_users(
    current_user: dict = Depends(get_current_user),
    presence: PresenceStore = Depends(get_presence_store)
):
    """在线用户列表（不含自己）"""
    users = presence.online(exclude_user_id=current_user["user_id"])
    return OnlineUsersResponse(users=users, count=len(users))
