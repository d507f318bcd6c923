"""
Redis-backed TypingStore.

Keys:
    {prefix}:typing:{conversation_id}:{user_id}   "1" with EX=typing_ttl
"""

from typing import TYPE_CHECKING

from chatline.domain.ports.typing_store import TypingStore
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId

if TYPE_CHECKING:
    from redis.asyncio import Redis


class RedisTypingStore(TypingStore):
    def __init__(self, redis: "Redis", prefix: str):
        self._redis = redis
        self._prefix = f"{prefix}:typing:"

    def _conversation_prefix(self, conversation_id: ConversationId) -> str:
        return f"{self._prefix}{conversation_id.value}:"

    async def set_typing(
        self, conversation_id: ConversationId, user_id: UserId, ttl_seconds: int
    ) -> None:
        key = f"{self._conversation_prefix(conversation_id)}{user_id.value}"
        await self._redis.setex(key, ttl_seconds, "1")

    async def clear_typing(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> None:
        await self._redis.delete(
            f"{self._conversation_prefix(conversation_id)}{user_id.value}"
        )

    async def typing_users(self, conversation_id: ConversationId) -> set[UserId]:
        prefix = self._conversation_prefix(conversation_id)
        users = set()
        cursor = 0
        while True:
            cursor, keys = await self._redis.scan(cursor, match=f"{prefix}*", count=100)
            for key in keys:
                users.add(UserId(key[len(prefix):]))
            if cursor == 0:
                break
        return users
