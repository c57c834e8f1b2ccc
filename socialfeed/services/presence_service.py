"""
在线状态服务

进程内的在线用户表，由应用生命周期创建并挂在 app.state 上，
心跳刷新最近活跃时间，后台任务定期清理超过 TTL 的用户。
多进程部署时各进程的在线表互相独立。
"""

import asyncio
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

from loguru import logger

from socialfeed.models import OnlineUser, UserBrief


@dataclass
class PresenceEntry:
    user: UserBrief
    last_seen: datetime
    touched_at: float


class PresenceStore:
    """在线用户表（按 TTL 过期）"""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, PresenceEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._entries

    def touch(self, user: UserBrief) -> datetime:
        """记录心跳，返回本次活跃时间"""
        now = datetime.utcnow()
        self._entries[user.id] = PresenceEntry(user=user, last_seen=now, touched_at=self._clock())
        return now

    def remove(self, user_id: str) -> bool:
        return self._entries.pop(user_id, None) is not None

    def sweep(self) -> int:
        """
        清理过期用户

        Returns:
            被清理的用户数
        """
        deadline = self._clock() - self.ttl_seconds
        expired = [
            user_id for user_id, entry in self._entries.items()
            if entry.touched_at < deadline
        ]
        for user_id in expired:
            del self._entries[user_id]

        if expired:
            logger.debug(f"Presence sweep evicted {len(expired)} users")
        return len(expired)

    def online(self, exclude_user_id: Optional[str] = None) -> List[OnlineUser]:
        """当前在线用户（按最近活跃时间倒序），不含已过期的"""
        deadline = self._clock() - self.ttl_seconds
        entries = [
            entry for user_id, entry in self._entries.items()
            if user_id != exclude_user_id and entry.touched_at >= deadline
        ]
        entries.sort(key=lambda entry: entry.touched_at, reverse=True)

        return [
            OnlineUser(**entry.user.model_dump(), last_seen=entry.last_seen)
            for entry in entries
        ]

    async def run_sweeper(self, interval: float) -> None:
        """后台清理循环，随应用关闭被取消"""
        logger.info(f"👥 Presence sweeper started (ttl={self.ttl_seconds}s, interval={interval}s)")
        try:
            while True:
                await asyncio.sleep(interval)
                self.sweep()
        except asyncio.CancelledError:
            logger.info("👥 Presence sweeper stopped")
            raise
