"""
In-memory PresenceStore.

Mirrors the Redis layout: an expiring online flag per user plus a last-seen
value without expiry. Expiry is evaluated lazily against the injected clock.
"""

import threading
from datetime import datetime, timedelta
from typing import Optional

from chatline.domain.ports.presence_store import PresenceStore
from chatline.domain.value_objects.user_id import UserId
from chatline.utils.clock import Clock, utc_now


class InMemoryPresenceStore(PresenceStore):
    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._online_until: dict[UserId, datetime] = {}
        self._last_seen: dict[UserId, datetime] = {}
        self._lock = threading.Lock()

    def _alive(self, user_id: UserId) -> bool:
        expires_at = self._online_until.get(user_id)
        if expires_at is None:
            return False
        if expires_at <= self._clock():
            del self._online_until[user_id]
            return False
        return True

    async def set_online(self, user_id: UserId, ttl_seconds: int) -> None:
        with self._lock:
            self._online_until[user_id] = self._clock() + timedelta(seconds=ttl_seconds)

    async def clear_online(self, user_id: UserId) -> None:
        with self._lock:
            self._online_until.pop(user_id, None)

    async def is_online(self, user_id: UserId) -> bool:
        with self._lock:
            return self._alive(user_id)

    async def online_users(self) -> set[UserId]:
        with self._lock:
            return {user_id for user_id in list(self._online_until) if self._alive(user_id)}

    async def set_last_seen(self, user_id: UserId, at: datetime) -> None:
        with self._lock:
            self._last_seen[user_id] = at

    async def get_last_seen(self, user_id: UserId) -> Optional[datetime]:
        with self._lock:
            return self._last_seen.get(user_id)
