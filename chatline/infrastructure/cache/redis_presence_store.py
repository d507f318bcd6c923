"""
Redis-backed PresenceStore.

Keys:
    {prefix}:presence:{user_id}   "1" with EX=ttl; existence means online
    {prefix}:last_seen:{user_id}  ISO timestamp, no expiry

Redis expires the online key itself, so a client that disappears without
saying goodbye goes offline after the TTL.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from chatline.domain.ports.presence_store import PresenceStore
from chatline.domain.value_objects.user_id import UserId

if TYPE_CHECKING:
    from redis.asyncio import Redis


class RedisPresenceStore(PresenceStore):
    def __init__(self, redis: "Redis", prefix: str):
        self._redis = redis
        self._online_prefix = f"{prefix}:presence:"
        self._last_seen_prefix = f"{prefix}:last_seen:"

    def _online_key(self, user_id: UserId) -> str:
        return f"{self._online_prefix}{user_id.value}"

    def _last_seen_key(self, user_id: UserId) -> str:
        return f"{self._last_seen_prefix}{user_id.value}"

    async def set_online(self, user_id: UserId, ttl_seconds: int) -> None:
        await self._redis.setex(self._online_key(user_id), ttl_seconds, "1")

    async def clear_online(self, user_id: UserId) -> None:
        await self._redis.delete(self._online_key(user_id))

    async def is_online(self, user_id: UserId) -> bool:
        return await self._redis.exists(self._online_key(user_id)) > 0

    async def online_users(self) -> set[UserId]:
        users = set()
        cursor = 0
        while True:
            cursor, keys = await self._redis.scan(
                cursor, match=f"{self._online_prefix}*", count=100
            )
            for key in keys:
                users.add(UserId(key[len(self._online_prefix):]))
            if cursor == 0:
                break
        return users

    async def set_last_seen(self, user_id: UserId, at: datetime) -> None:
        await self._redis.set(self._last_seen_key(user_id), at.isoformat())

    async def get_last_seen(self, user_id: UserId) -> Optional[datetime]:
        value = await self._redis.get(self._last_seen_key(user_id))
        return datetime.fromisoformat(value) if value else None
