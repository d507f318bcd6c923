"""
Presence tracker - who is online right now, and when each user was last seen.

Online state is a TTL flag: a client that stops heartbeating drops offline once
``presence_ttl`` elapses, without anyone calling ``set_offline``. Last-seen is
written on every transition and never expires.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from chatline.config.settings import ChatConfig
from chatline.domain.exceptions import FeatureDisabledError
from chatline.domain.ports.presence_store import PresenceStore
from chatline.domain.value_objects.user_id import UserId
from chatline.utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresenceSummary:
    user_id: UserId
    is_online: bool
    last_seen_at: Optional[datetime]


class PresenceTracker:
    def __init__(self, config: ChatConfig, store: PresenceStore, clock: Clock = utc_now):
        self._config = config
        self._store = store
        self._clock = clock

    def _require_enabled(self) -> None:
        if not self._config.presence_enabled:
            raise FeatureDisabledError("presence")

    async def set_online(self, user_id: UserId) -> None:
        self._require_enabled()
        await self._store.set_online(user_id, self._config.presence_ttl)
        await self._store.set_last_seen(user_id, self._clock())
        logger.debug(f"[Presence] {user_id} online")

    async def set_offline(self, user_id: UserId) -> None:
        self._require_enabled()
        await self._store.clear_online(user_id)
        await self._store.set_last_seen(user_id, self._clock())
        logger.debug(f"[Presence] {user_id} offline")

    async def touch_last_seen(self, user_id: UserId) -> None:
        await self._store.set_last_seen(user_id, self._clock())

    async def is_online(self, user_id: UserId) -> bool:
        if not self._config.presence_enabled:
            return False
        return await self._store.is_online(user_id)

    async def list_online(self) -> set[UserId]:
        if not self._config.presence_enabled:
            return set()
        return await self._store.online_users()

    async def bulk_check(self, user_ids: list[UserId]) -> dict[UserId, bool]:
        return {user_id: await self.is_online(user_id) for user_id in user_ids}

    async def last_seen(self, user_id: UserId) -> Optional[datetime]:
        return await self._store.get_last_seen(user_id)

    async def summary(self, user_id: UserId) -> PresenceSummary:
        return PresenceSummary(
            user_id=user_id,
            is_online=await self.is_online(user_id),
            last_seen_at=await self.last_seen(user_id),
        )
