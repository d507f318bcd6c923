"""
Presence Store Port - ephemeral online flags plus durable last-seen.
Implementations:
- chatline/infrastructure/cache/redis_presence_store.py
- chatline/infrastructure/memory/memory_presence_store.py
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from chatline.domain.value_objects.user_id import UserId


class PresenceStore(ABC):
    @abstractmethod
    async def set_online(self, user_id: UserId, ttl_seconds: int) -> None: ...

    @abstractmethod
    async def clear_online(self, user_id: UserId) -> None: ...

    @abstractmethod
    async def is_online(self, user_id: UserId) -> bool: ...

    @abstractmethod
    async def online_users(self) -> set[UserId]: ...

    @abstractmethod
    async def set_last_seen(self, user_id: UserId, at: datetime) -> None: ...

    @abstractmethod
    async def get_last_seen(self, user_id: UserId) -> Optional[datetime]: ...
