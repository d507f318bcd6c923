"""
Cache Layer - Redis-backed ephemeral state.

Contains the async Redis client factory and the TTL presence/typing stores.
"""

from chatline.infrastructure.cache.redis_client import create_redis_client, close_redis_client
from chatline.infrastructure.cache.redis_presence_store import RedisPresenceStore
from chatline.infrastructure.cache.redis_typing_store import RedisTypingStore

__all__ = [
    "create_redis_client",
    "close_redis_client",
    "RedisPresenceStore",
    "RedisTypingStore",
]
